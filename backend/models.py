# models.py
# typed request/response models and shared DayPlan/Itinerary definitions

from pydantic import BaseModel, Field
from typing import List, Optional

UNKNOWN_LOCATION = "Unknown Location"


class DayPlan(BaseModel):
    day: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    activities: List[str] = Field(..., min_length=1, max_length=4)


class Itinerary(BaseModel):
    title: str
    location: str = Field(..., min_length=1)
    duration: str = Field(..., description="'<N> Days'")
    days: List[DayPlan] = Field(..., min_length=3)


class ContentBundle(BaseModel):
    """Raw content signals for one video, whichever strategy produced them."""
    transcription: str = ""
    caption: str = ""
    screenText: str = ""
    location: str = UNKNOWN_LOCATION
    activities: List[str] = Field(default_factory=list)


class DownloadedVideo(BaseModel):
    content: bytes
    filename: str = "video.mp4"
    caption: str = ""
    thumbnail: Optional[str] = None


class ProcessRequest(BaseModel):
    # None allowed; handler.process_video rejects missing/blank URLs
    videoUrl: Optional[str] = None


class SavedItinerary(BaseModel):
    id: str
    title: str
    location: str
    duration: str
    videoUrl: str
    transcription: str = ""
    # stored rows are echoed as-is; older rows may predate the DayPlan caps
    itinerary: List[dict] = Field(default_factory=list)
    createdAt: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "SavedItinerary":
        # row keys follow the itineraries table (snake_case)
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            location=row.get("location") or UNKNOWN_LOCATION,
            duration=row.get("duration") or "",
            videoUrl=row.get("video_url") or "",
            transcription=row.get("transcription") or "",
            itinerary=row.get("itinerary_content") or [],
            createdAt=row.get("created_at"),
        )


class ProcessResponse(BaseModel):
    success: bool = True
    itinerary: SavedItinerary


class ItineraryListResponse(BaseModel):
    itineraries: List[SavedItinerary]


class DeleteResponse(BaseModel):
    success: bool = True
    id: str


class ErrorResponse(BaseModel):
    error: str
