from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from typing import Optional, List, Dict, Any, Union
from typing_extensions import Annotated


def _as_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    return value


def _as_item_list(value: Any) -> Any:
    value = _as_list(value)
    if isinstance(value, list):
        return [item if isinstance(item, dict) else str(item) for item in value if item is not None]
    return value


# Plain strings, or structured entries like {"name": "Python", "level": "expert"}
ListItem = Union[str, Dict[str, Any]]
ItemList = Annotated[List[ListItem], BeforeValidator(_as_item_list)]

_LABEL_KEYS = ("name", "title", "text", "description", "skill")


def item_label(item: ListItem) -> str:
    """
    Display text for a list entry. Structured entries use their first naming
    key, falling back to their scalar values.
    """
    if isinstance(item, str):
        return item
    for key in _LABEL_KEYS:
        if item.get(key):
            return str(item[key])
    return ", ".join(str(v) for v in item.values() if isinstance(v, (str, int, float)))


def item_labels(items: List[ListItem]) -> List[str]:
    return [label for label in (item_label(item) for item in items) if label]


class _ResumeModel(BaseModel):
    # Generation output is loosely shaped: keep unknown keys, accept either spelling,
    # and take numbers where text is expected ("phone": 5550100, "year": 2019).
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)


class Contact(_ResumeModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None


class SkillGroups(_ResumeModel):
    technical: ItemList = Field(default_factory=list)
    soft: ItemList = Field(default_factory=list)
    certifications: ItemList = Field(default_factory=list)


class Experience(_ResumeModel):
    company: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    is_current_role: Optional[bool] = Field(None, alias="isCurrentRole")
    location: Optional[str] = None
    description: Optional[str] = None
    achievements: ItemList = Field(default_factory=list)
    responsibilities: ItemList = Field(default_factory=list)
    keywords: ItemList = Field(default_factory=list)


class Education(_ResumeModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    year: Optional[str] = None
    gpa: Optional[str] = None
    honors: Optional[str] = None


class TailoringNotes(_ResumeModel):
    key_changes: ItemList = Field(default_factory=list, alias="keyChanges")
    keywords_added: ItemList = Field(default_factory=list, alias="keywordsAdded")
    focus_areas: ItemList = Field(default_factory=list, alias="focusAreas")


RESUME_SECTIONS = ("summary", "skills", "experience", "education", "contact")


class ResumeData(_ResumeModel):
    contact: Optional[Union[Contact, str]] = None
    summary: Optional[str] = None
    skills: Optional[Union[SkillGroups, ItemList]] = Field(None, union_mode="left_to_right")
    experience: Annotated[List[Experience], BeforeValidator(_as_list)] = Field(default_factory=list)
    education: Annotated[List[Union[Education, str]], BeforeValidator(_as_list)] = Field(default_factory=list)
    ats_score: Optional[Union[int, float, str]] = None
    ats_recommendations: ItemList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _require_resume_sections(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("resume must be a JSON object")
        if not any(data.get(section) for section in RESUME_SECTIONS):
            raise ValueError(f"resume has none of the sections {', '.join(RESUME_SECTIONS)}")
        return data

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TailoredResume(ResumeData):
    tailoring_notes: Optional[TailoringNotes] = None


# For POST /resume/tailor. Inputs stay optional so missing ones map to a 400
# with a readable message instead of a schema dump.
class TailorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_data: Optional[Dict[str, Any]] = Field(None, alias="resumeData")
    job_description: Optional[str] = Field(None, alias="jobDescription")
    company_name: Optional[str] = Field(None, alias="companyName")
    role_title: Optional[str] = Field(None, alias="roleTitle")


class TailorMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_name: Optional[str] = Field(None, alias="companyName")
    role_title: Optional[str] = Field(None, alias="roleTitle")
    created_at: str = Field(alias="createdAt")


class DocumentEnvelope(BaseModel):
    """
    One persisted tailoring event. Written once under a fresh key and never
    partially updated.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    company_name: str = Field(alias="companyName")
    role_title: str = Field(alias="roleTitle")
    created_at: str = Field(alias="createdAt")
    original_resume: Dict[str, Any] = Field(alias="originalResume")
    tailored_resume: Dict[str, Any] = Field(alias="tailoredResume")
    job_description: str = Field(alias="jobDescription")
    document: str

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True, indent=2).encode("utf-8")


# For POST /resume/generate-pdf and /resume/match
class ResumeWithJobRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_data: Optional[Dict[str, Any]] = Field(None, alias="resumeData")
    job_description: Optional[str] = Field(None, alias="jobDescription")
