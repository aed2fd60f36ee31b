from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

DocumentType = Literal["original", "tailored", "parsed"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DocumentMetadata(_CamelModel):
    original_file_name: Optional[str] = Field(None, alias="originalFileName")
    company_name: Optional[str] = Field(None, alias="companyName")
    role_title: Optional[str] = Field(None, alias="roleTitle")
    uploaded_at: Optional[str] = Field(None, alias="uploadedAt")
    created_at: Optional[str] = Field(None, alias="createdAt")


class DocumentItem(_CamelModel):
    key: str
    size: int = 0
    last_modified: Optional[datetime] = Field(None, alias="lastModified")
    type: DocumentType
    file_name: str = Field(alias="fileName")
    download_url: str = Field(alias="downloadUrl")
    signed_download_url: str = Field(alias="signedDownloadUrl")
    metadata: Optional[DocumentMetadata] = None


class TailoredResumeFlags(_CamelModel):
    has_original: bool = Field(False, alias="hasOriginal")
    has_tailored: bool = Field(False, alias="hasTailored")
    has_job_description: bool = Field(False, alias="hasJobDescription")


class TailoredResumeSummary(_CamelModel):
    key: str
    size: int = 0
    last_modified: Optional[datetime] = Field(None, alias="lastModified")
    company_name: str = Field("Unknown", alias="companyName")
    role_title: str = Field("Unknown Role", alias="roleTitle")
    created_at: Optional[str] = Field(None, alias="createdAt")
    s3_url: str = Field(alias="s3Url")
    metadata: TailoredResumeFlags


class DocumentListing(_CamelModel):
    documents: List[DocumentItem] = Field(default_factory=list)
    has_more: bool = Field(False, alias="hasMore")

    @property
    def total(self) -> int:
        return len(self.documents)


class DeleteKeyRequest(BaseModel):
    key: Optional[str] = None
