from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from imagestudio.domain.generations.entities import Generation

UPLOAD_SUCCESS_MESSAGE = "Generation created successfully"


class GenerationDTO(BaseModel):
    id: int
    prompt: str
    image_path: str = Field(serialization_alias="imagePath")
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_entity(cls, generation: Generation) -> GenerationDTO:
        return cls(
            id=generation.id,
            prompt=generation.prompt,
            image_path=generation.image_path,
            created_at=generation.created_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class UploadSuccessDTO(BaseModel):
    message: str = UPLOAD_SUCCESS_MESSAGE
    generation: GenerationDTO

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
