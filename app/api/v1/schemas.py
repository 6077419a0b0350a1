from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.application.utils.pricing import ServiceLevel


class ServiceLevelOptionSchema(BaseModel):
    value: ServiceLevel
    label: str
    multiplier: float


class QuoteOptionsSchema(BaseModel):
    event_types: list[str]
    service_levels: list[ServiceLevelOptionSchema]
    currency_symbol: str


class EstimateRequestSchema(BaseModel):
    expected_attendees: int | None = None
    event_duration_hours: int | None = None
    service_level: str | None = None


class EstimateResponseSchema(BaseModel):
    estimated_quote: int
    currency_symbol: str


class QuoteRequestSchema(BaseModel):
    name: str
    email: str
    event_type: str
    phone: str | None = None
    company: str | None = None
    event_date: date | None = None
    event_duration_hours: int | None = None
    expected_attendees: int | None = None
    location: str | None = None
    service_level: str | None = None
    additional_requirements: str | None = None


class QuoteRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    event_type: str
    event_date: date | None = None
    event_duration_hours: int | None = None
    expected_attendees: int | None = None
    location: str | None = None
    service_level: str | None = None
    additional_requirements: str | None = None
    estimated_quote: int | None = None
    status: str
    created_at: datetime
    user_id: str | None = None


class ContactRequestSchema(BaseModel):
    name: str
    email: str
    phone: str | None = None
    event_type: str | None = None
    event_date: date | None = None
    attendees: int | None = None
    message: str | None = None


class ContactRecordSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str | None = None
    event_type: str | None = None
    event_date: date | None = None
    attendees: int | None = None
    message: str | None = None
    status: str
    created_at: datetime
    user_id: str | None = None


class CourseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    duration: str | None = None
    price: float | None = None
    category: str | None = None


class CourseSessionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    session_date: date
    start_time: str
    location: str | None = None
    available_spots: int


class BookingConfirmationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    booking_id: str
    course_title: str
    session_date: date
    start_time: str
    location: str | None = None
    participants: int
    total_price: float | None = None
    email: str


class WorkflowResponseSchema(BaseModel):
    workflow_id: str
    status: str
    action: str | None = None
    message: str | None = None
    courses: list[CourseSchema] = Field(default_factory=list)
    selected_course_id: str | None = None
    sessions: list[CourseSessionSchema] = Field(default_factory=list)
    selected_session_id: str | None = None
    max_participants: int | None = None
    confirmation: BookingConfirmationSchema | None = None


class SelectCourseSchema(BaseModel):
    course_id: str


class SelectSessionSchema(BaseModel):
    session_id: str


class ParticipantDetailsSchema(BaseModel):
    name: str
    email: str
    participants: int = 1
    phone: str | None = None
    company: str | None = None


class BookingRecordSchema(BaseModel):
    id: str
    session_id: str
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    participants: int
    status: str
    created_at: datetime
    user_id: str | None = None
    course_title: str | None = None
    session_date: date | None = None
    start_time: str | None = None
    location: str | None = None


class StatusUpdateSchema(BaseModel):
    status: str


class QuoteListSchema(BaseModel):
    records: list[QuoteRecordSchema]
    notice: str | None = None


class BookingListSchema(BaseModel):
    records: list[BookingRecordSchema]
    notice: str | None = None


class ContactListSchema(BaseModel):
    records: list[ContactRecordSchema]
    notice: str | None = None


class PortalResponseSchema(BaseModel):
    quotes: list[QuoteRecordSchema]
    bookings: list[BookingRecordSchema]
    inquiries: list[ContactRecordSchema]
    notices: list[str] = Field(default_factory=list)
