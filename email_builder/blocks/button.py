"""
Blocs bouton : Button, ButtonGroup (sous-boutons identifiés) et Calendar.
Calendar = bouton dont le lien est une invitation iCalendar générée au rendu.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from ..ids import new_id
from .base import Alignment, BaseBlock


class ButtonBlock(BaseBlock):
    block_type: Literal["button"] = "button"
    text: str = "Click Me"
    href: str = "#"
    background_color: str = "#0d6efd"
    text_color: str = "#ffffff"
    font_size: int = Field(default=16, ge=1)
    font_weight: Literal["normal", "bold"] = "normal"
    font_family: str = "Arial"
    alignment: Alignment = "center"
    border_radius: int = Field(default=5, ge=0)
    use_global_accent: bool = True
    use_global_font: bool = True


class SubButton(BaseModel):
    id: str = Field(default_factory=lambda: new_id("btn"))
    text: str = "New Button"
    href: str = "#"
    background_color: str = "#6c757d"
    text_color: str = "#ffffff"


def _default_buttons() -> List[SubButton]:
    return [
        SubButton(text="Button 1", background_color="#0d6efd"),
        SubButton(text="Button 2", background_color="#6c757d"),
    ]


class ButtonGroupBlock(BaseBlock):
    block_type: Literal["button-group"] = "button-group"
    buttons: List[SubButton] = Field(default_factory=_default_buttons)
    alignment: Alignment = "center"
    font_family: str = "Arial"
    use_global_font: bool = True


def _next_hour() -> datetime:
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0, tzinfo=None)
    return now + timedelta(hours=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class CalendarBlock(ButtonBlock):
    """Bouton « ajouter au calendrier ». Dates naïves = UTC."""
    block_type: Literal["calendar"] = "calendar"
    text: str = "Add to calendar"
    event_title: str = "Event"
    event_description: str = ""
    event_location: str = ""
    start: datetime = Field(default_factory=_next_hour)
    end: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utc_now)   # DTSTAMP, figé pour un rendu déterministe

    @model_validator(mode="after")
    def _check_range(self):
        if self.end is None:
            self.end = self.start + timedelta(hours=1)
        elif self.end < self.start:
            raise ValueError("end doit être postérieur à start")
        return self
