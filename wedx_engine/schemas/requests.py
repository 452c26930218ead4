"""
Request Schemas for wedX Ritual Engine API.

This module defines Pydantic models for API request validation.
All requests are validated before processing by the engines.
"""

from pydantic import BaseModel, Field
from typing import Optional, List

# HH:MM or HH:MM:SS, 24-hour clock
TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$"


class CurrentEvent(BaseModel):
    """
    Event already on the wedding plan, as passed to task generation.

    Attributes:
        id: Event identifier
        name: Display name
        date: Calendar date (YYYY-MM-DD)
        start_time: Optional start time (HH:MM)
        end_time: Optional end time (HH:MM)
    """
    id: str
    name: str
    date: str
    start_time: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)


class CurrentVendor(BaseModel):
    """
    Vendor already on the wedding plan, as passed to task generation.

    Attributes:
        id: Vendor identifier
        name: Display name
        service_types: Services the vendor offers
        booked_events: Event ids the vendor is booked for
    """
    id: str
    name: str
    service_types: List[str] = Field(default_factory=list)
    booked_events: List[str] = Field(default_factory=list)


class RitualTaskGenerationRequest(BaseModel):
    """
    Request model for ritual task generation.

    Attributes:
        wedding_id: Wedding identifier (taken from the URL path by the API)
        rituals: Selected ritual identifiers
        wedding_date: Wedding date as an ISO string
        current_events: Events already planned (accepted, not used yet)
        current_vendors: Vendors already booked (accepted, not used yet)
    """
    wedding_id: Optional[str] = Field(
        None,
        description="Wedding identifier"
    )
    rituals: List[str] = Field(
        default_factory=list,
        description="Selected ritual identifiers",
        examples=[["poruwa", "reception"]]
    )
    wedding_date: Optional[str] = Field(
        None,
        description="Wedding date (ISO 8601)",
        examples=["2026-06-15"]
    )
    current_events: List[CurrentEvent] = Field(default_factory=list)
    current_vendors: List[CurrentVendor] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "rituals": ["poruwa", "home_coming"],
                "wedding_date": "2026-06-15",
                "current_events": [],
                "current_vendors": []
            }
        }


class RitualScheduleRequest(BaseModel):
    """
    Request model for the ritual timeline and validation endpoints.

    Attributes:
        rituals: Selected ritual identifiers
        wedding_date: Wedding date as an ISO string
    """
    rituals: List[str] = Field(
        default_factory=list,
        description="Selected ritual identifiers",
        examples=[["poruwa", "engagement"]]
    )
    wedding_date: Optional[str] = Field(
        None,
        description="Wedding date (ISO 8601)",
        examples=["2026-06-15"]
    )


class EventInput(BaseModel):
    """
    Event checked by the conflict detector.

    Attributes:
        id: Event identifier
        name: Display name
        date: Calendar date (YYYY-MM-DD)
        start_time: Optional start time (HH:MM)
        end_time: Optional end time (HH:MM)
        vendor_ids: Vendors linked to the event
    """
    id: str
    name: str
    date: str
    start_time: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)
    vendor_ids: List[str] = Field(default_factory=list)


class VendorInput(BaseModel):
    """
    Vendor checked by the conflict detector.

    Attributes:
        id: Vendor identifier
        name: Display name
        service_types: Services the vendor offers
        availability: Dates (YYYY-MM-DD) the vendor is available
        cultural_specialties: Optional cultural specialty tags
    """
    id: str
    name: str
    service_types: List[str] = Field(default_factory=list)
    availability: List[str] = Field(default_factory=list)
    cultural_specialties: Optional[List[str]] = None


class ConflictDetectionRequest(BaseModel):
    """
    Request model for conflict detection.

    Attributes:
        wedding_id: Wedding identifier (taken from the URL path by the API)
        events: Events to check
        vendors: Vendors linked to those events
        wedding_type: Wedding style (e.g. "traditional_sinhala")
        cultural_preferences: Optional cultural preference tags
    """
    wedding_id: Optional[str] = None
    events: Optional[List[EventInput]] = None
    vendors: Optional[List[VendorInput]] = None
    wedding_type: str = ""
    cultural_preferences: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "events": [
                    {
                        "id": "event-1",
                        "name": "Poruwa Ceremony",
                        "date": "2026-06-15",
                        "start_time": "09:00",
                        "end_time": "12:00",
                        "vendor_ids": ["vendor-1"]
                    },
                    {
                        "id": "event-2",
                        "name": "Reception",
                        "date": "2026-06-15",
                        "start_time": "11:30",
                        "end_time": "16:00",
                        "vendor_ids": ["vendor-1"]
                    }
                ],
                "vendors": [
                    {
                        "id": "vendor-1",
                        "name": "Lanka Lens Photography",
                        "service_types": ["photographer"],
                        "availability": ["2026-06-15"]
                    }
                ],
                "wedding_type": "traditional_sinhala"
            }
        }


class ResolveConflictRequest(BaseModel):
    """Chosen resolution option for a conflict."""
    resolution_id: Optional[str] = None


class DismissConflictRequest(BaseModel):
    """Free-text reason for dismissing a conflict."""
    reason: Optional[str] = None
