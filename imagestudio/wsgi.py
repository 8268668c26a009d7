# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from imagestudio.app import create_app
from imagestudio.shared.config import load_config

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=load_config().port, threaded=True)
