# backend/app/core/scoring/rubric.py
from typing import Dict, List

from backend.app.config.settings import DEFAULT_SUB_FIELD_MAX
from backend.app.schemas.form_schemas import FieldDefinition, SubFieldDefinition

STANDARD_RUBRIC: Dict[str, List[str]] = {
    "Technical Competence": [
        "Fundamentals Understanding",
        "Ability to Ask and Answer Questions",
        "Quiz Score",
    ],
    "Communication": [
        "Active Listening",
        "Verbal Fluency + Articulation",
        "PPT + Way of Delivery (Clarity)",
    ],
    "Learning & Adaptability": [
        "Efforts towards understanding",
        "Handling uncertainty",
        "Willingness to Receive Feedback",
    ],
    "Initiative & Ownership": [
        "Volunteering for Demonstrations / Answers",
        "Asking Relevant Questions",
        "Recall During the Next Session",
    ],
    "Professionalism": [
        "Respectful Communication",
        "Responsiveness in Team Communication",
        "Punctuality",
    ],
}


def default_standard_fields() -> List[FieldDefinition]:
    """Fresh copies of the five standard rubric fields every form starts with."""
    return [
        FieldDefinition(
            name=name,
            max_value=len(subs) * DEFAULT_SUB_FIELD_MAX,
            sub_fields=[SubFieldDefinition(name=s, max_value=DEFAULT_SUB_FIELD_MAX) for s in subs],
        )
        for name, subs in STANDARD_RUBRIC.items()
    ]
