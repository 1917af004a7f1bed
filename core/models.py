"""
Data contracts for a dictation session.

  - AudioSubmission: the uploaded recording, alive only until transcription
  - StructuredReport: the transcript plus its clinical sections
  - ProcessingStatus / ProcessingState: the UI phase and what it carries
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from core.util.ids import new_submission_id


class ProcessingStatus(str, Enum):
    IDLE = "IDLE"
    UPLOADING = "UPLOADING"
    TRANSCRIBING = "TRANSCRIBING"
    REFINING = "REFINING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"

    @property
    def in_flight(self) -> bool:
        return self in (ProcessingStatus.UPLOADING, ProcessingStatus.TRANSCRIBING, ProcessingStatus.REFINING)


@dataclass
class AudioSubmission:
    """Raw audio bytes plus the MIME type declared by the upload."""
    audio: bytes
    mime_type: str
    source_path: Optional[str] = None
    submission_id: str = field(default_factory=new_submission_id)


# Section attribute name -> wire (JSON) key used by the structuring model.
SECTION_KEYS = {
    "patient_info": "patientInfo",
    "clinical_history": "clinicalHistory",
    "findings": "findings",
    "diagnosis": "diagnosis",
    "plan": "plan",
}


@dataclass(frozen=True)
class StructuredReport:
    original_text: str
    patient_info: Optional[str] = None
    clinical_history: Optional[str] = None
    findings: Optional[str] = None
    diagnosis: Optional[str] = None
    plan: Optional[str] = None
    is_fallback: bool = False

    @classmethod
    def from_sections(cls, original_text: str, data: dict) -> "StructuredReport":
        """Build a report from a parsed model payload. `originalText` in the payload is ignored."""
        sections = {}
        for attr, key in SECTION_KEYS.items():
            value = data.get(key)
            sections[attr] = value if isinstance(value, str) else None
        return cls(original_text=original_text, **sections)

    def to_dict(self) -> dict:
        d = {"originalText": self.original_text}
        for attr, key in SECTION_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                d[key] = value
        return d


@dataclass(frozen=True)
class ProcessingState:
    """Snapshot of the state machine. `error` only in ERROR, `report` only in COMPLETED."""
    status: ProcessingStatus = ProcessingStatus.IDLE
    error: Optional[str] = None
    report: Optional[StructuredReport] = None
    audio_handle: Optional[str] = None

    def evolve(self, **changes) -> "ProcessingState":
        return replace(self, **changes)
