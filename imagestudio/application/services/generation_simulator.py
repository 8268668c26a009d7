# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stand-in for the image model call."""

from __future__ import annotations

import random
import time
from collections.abc import Callable

from imagestudio.domain.generations.exceptions import SimulatedServiceError
from imagestudio.domain.generations.repositories import GenerationEngine
from imagestudio.shared.logging import logger


class GenerationSimulator(GenerationEngine):
    """Sleeps for a fixed delay and optionally fails at a configured rate.

    There is no timeout or cancellation around the delay; a real inference
    call placed here would need both.
    """

    def __init__(
        self,
        *,
        delay_seconds: float,
        failure_rate: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._failure_rate = min(max(float(failure_rate), 0.0), 1.0)
        self._sleep = sleep
        self._rng = rng

    def run(self, prompt: str) -> None:
        if self._delay:
            self._sleep(self._delay)
        if self._failure_rate and self._rng() < self._failure_rate:
            logger.warning(f"generation.simulate: injected failure prompt_len={len(prompt)}")
            raise SimulatedServiceError()
        logger.debug(f"generation.simulate: ok delay={self._delay:.2f}s")
