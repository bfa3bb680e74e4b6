"""
Static checklist definition for the CAUTI and VAP prevention bundles.

Loaded once at import time and never mutated afterwards.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

CAUTI = "cauti"
VAP = "vap"
BOTH = "both"

SCOPES = (CAUTI, VAP, BOTH)
SECTION_FILTERS = ("all", CAUTI, VAP)


@dataclass(frozen=True)
class ChecklistItem:
    key: str
    text: str
    section: str


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    items: Tuple[ChecklistItem, ...]

    @property
    def keys(self) -> List[str]:
        return [item.key for item in self.items]


@dataclass(frozen=True)
class ReasonField:
    """Free-choice explanation required when the trigger item is answered no."""
    key: str
    trigger_key: str
    label: str
    options: Tuple[str, ...] = field(default_factory=tuple)


def _items(section: str, texts: List[str]) -> Tuple[ChecklistItem, ...]:
    return tuple(
        ChecklistItem(key=f"{section}_{number}", text=text, section=section)
        for number, text in enumerate(texts, start=1)
    )


CAUTI_SECTION = Section(
    key=CAUTI,
    title="CAUTI prevention bundle",
    items=_items(CAUTI, [
        "Urinary catheter removed as soon as it is no longer indicated",
        "Hand hygiene performed before and after touching the catheter",
        "Closed drainage system maintained without disconnection",
        "Catheter secured to the thigh or abdomen",
        "Drainage bag kept below bladder level and off the floor",
        "Urine flow unobstructed, tubing free of kinks",
        "Perineal and meatal care performed daily",
        "Drainage bag emptied regularly using a separate clean container",
    ]),
)

VAP_SECTION = Section(
    key=VAP,
    title="VAP prevention bundle",
    items=_items(VAP, [
        "Hand hygiene performed before and after airway care",
        "Daily sedation interruption and readiness-to-extubate assessment",
        "Oral care with chlorhexidine performed",
        "Head of bed elevated 30-45 degrees",
        "Endotracheal cuff pressure kept at 20-30 cmH2O",
        "Peptic ulcer disease prophylaxis given",
        "Deep vein thrombosis prophylaxis given",
    ]),
)

SECTIONS = (CAUTI_SECTION, VAP_SECTION)

CHECKLIST_ITEMS: Tuple[ChecklistItem, ...] = CAUTI_SECTION.items + VAP_SECTION.items
CHECKLIST_KEYS: List[str] = [item.key for item in CHECKLIST_ITEMS]
ITEM_TEXT_BY_KEY: Dict[str, str] = {item.key: item.text for item in CHECKLIST_ITEMS}
SECTION_BY_KEY: Dict[str, str] = {item.key: item.section for item in CHECKLIST_ITEMS}

# Option values are persisted verbatim; existing records depend on the exact strings.
CAUTI_1_NO_REASON_OPTIONS = (
    "1.มีการอุดตันของระบบทางเดินปัสสาวะ",
    "2.ต้องการตัวเลขที่ถูกต้องของจำนวนปัสสาวะ",
    "3.ระยะเวลานาน",
    "4.ความถูกต้องของ I/O",
    "5.ผ่าตัดบริเวณก้นกบ",
    "6.ผ่าตัดระบบทางเดินปัสสาวะ",
    "7.มีแผลบริเวณก้นกบและอวัยวะสืบพันธุ์",
    "8.จำกัดการเคลื่อนไหวเป็นเวลานารน",
    "6.ความสุขสบายของผู้ป่วยในระยะสุดท้าย",
)
VAP_4_NO_REASON_OPTIONS = ("มีข้อห้าม", "ไม่มีข้อห้าม")

REASON_FIELDS = (
    ReasonField(
        key="cauti_1_no_reason",
        trigger_key="cauti_1",
        label="Reason catheter was kept (CAUTI item 1 answered no)",
        options=CAUTI_1_NO_REASON_OPTIONS,
    ),
    ReasonField(
        key="vap_4_no_reason",
        trigger_key="vap_4",
        label="Head-of-bed contraindication (VAP item 4 answered no)",
        options=VAP_4_NO_REASON_OPTIONS,
    ),
)
REASON_KEYS: List[str] = [reason.key for reason in REASON_FIELDS]


def keys_for_scope(scope: str) -> List[str]:
    """Item keys an assessment of the given scope must answer."""
    if scope == CAUTI:
        return CAUTI_SECTION.keys
    if scope == VAP:
        return VAP_SECTION.keys
    return list(CHECKLIST_KEYS)


def reason_fields_for_section(section: str) -> List[ReasonField]:
    """Reason fields whose trigger item belongs to the section ('all' keeps every field)."""
    if section in (CAUTI, VAP):
        return [reason for reason in REASON_FIELDS if SECTION_BY_KEY[reason.trigger_key] == section]
    return list(REASON_FIELDS)


def as_dict() -> dict:
    """JSON-ready view of the whole definition."""
    definition = {
        section.key: {
            "title": section.title,
            "items": [{"key": item.key, "text": item.text} for item in section.items],
        }
        for section in SECTIONS
    }
    definition["reasonFields"] = [
        {
            "key": reason.key,
            "triggerKey": reason.trigger_key,
            "label": reason.label,
            "options": list(reason.options),
        }
        for reason in REASON_FIELDS
    ]
    return definition
