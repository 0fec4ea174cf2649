from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class FileMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str
    size: int
    uploaded_at: str = Field(alias="uploadedAt")

class IngestResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: Optional[str] = None
    document_id: str = Field(alias="documentId")
    file_metadata: List[FileMetadata] = Field(alias="fileMetadata")

class ConvertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latex_code: str = Field(alias="latexCode")

class ErrorResponse(BaseModel):
    error: str

class EnvironmentInfo(BaseModel):
    python: str
    env: str
    platform: str
    uptime: float

class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    timestamp: str
    gemini_configured: bool = Field(alias="geminiConfigured")
    environment: Optional[EnvironmentInfo] = None
    error: Optional[str] = None
