"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List, Any, Dict
from datetime import datetime
from enum import Enum

from eventgo.db.tables import as_utc


# ============================================================
# ENUMS
# ============================================================

class AppRole(str, Enum):
    student = "student"
    college = "college"
    company = "company"
    admin = "admin"


class EventStatus(str, Enum):
    draft = "draft"
    published = "published"
    cancelled = "cancelled"
    completed = "completed"


class OpportunityType(str, Enum):
    job = "job"
    internship = "internship"
    hackathon = "hackathon"
    competition = "competition"


class ApplicationStatus(str, Enum):
    applied = "applied"
    under_review = "under_review"
    shortlisted = "shortlisted"
    rejected = "rejected"
    accepted = "accepted"


class RegistrationStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class ConnectionStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: str = Field(..., min_length=2, max_length=200)
    role: AppRole = AppRole.student
    phone: Optional[str] = None
    # student
    college_name: Optional[str] = None
    graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    # college
    city: Optional[str] = None
    # company
    company_name: Optional[str] = None
    industry: Optional[str] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class PasswordUpdateRequest(BaseModel):
    current_password: str
    new_password: str

class PasswordCheckRequest(BaseModel):
    password: str

class PasswordCheckResponse(BaseModel):
    is_valid: bool
    message: str
    strength: str

class AuthUser(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None

class AuthResponse(BaseModel):
    user: AuthUser
    token: str
    authenticated: bool = True

class AuthStatusResponse(BaseModel):
    authenticated: bool
    user: Optional[AuthUser] = None


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=200)
    phone: Optional[str] = None
    bio: Optional[str] = None
    college_name: Optional[str] = None
    graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    skills: Optional[List[str]] = None
    resume_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None

class ProfileResponse(BaseModel):
    id: str
    user_id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    college_name: Optional[str] = None
    graduation_year: Optional[int] = None
    skills: Optional[List[str]] = None
    resume_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

class UserDetailResponse(BaseModel):
    profile: ProfileResponse
    role: Optional[str] = None


# ============================================================
# ORGANIZATION SCHEMAS
# ============================================================

class CollegeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    short_name: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    established_year: Optional[int] = Field(None, ge=1800, le=2100)

class CollegeResponse(BaseModel):
    id: str
    user_id: str
    name: str
    short_name: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    established_year: Optional[int] = None
    is_verified: bool = False
    is_active: bool = True
    created_at: datetime

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    logo_url: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    headquarters: Optional[str] = None
    description: Optional[str] = None

class CompanyResponse(BaseModel):
    id: str
    user_id: str
    name: str
    logo_url: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    headquarters: Optional[str] = None
    description: Optional[str] = None
    is_verified: bool = False
    is_active: bool = True
    created_at: datetime


# ============================================================
# EVENT SCHEMAS
# ============================================================

class SubEventCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    venue: Optional[str] = None
    start_time: datetime
    end_time: datetime
    max_participants: Optional[int] = Field(None, ge=1)
    price: float = Field(0, ge=0)
    is_team_event: bool = False
    min_team_size: int = Field(1, ge=1)
    max_team_size: int = Field(1, ge=1)

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_as_utc(cls, value):
        return as_utc(value)

    @model_validator(mode="after")
    def check_ranges(self):
        if self.end_time < self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.max_team_size < self.min_team_size:
            raise ValueError("max_team_size must be >= min_team_size")
        return self

class SubEventResponse(BaseModel):
    id: str
    event_id: str
    title: str
    description: Optional[str] = None
    venue: Optional[str] = None
    start_time: datetime
    end_time: datetime
    max_participants: Optional[int] = None
    price: float = 0
    is_team_event: bool = False
    min_team_size: int = 1
    max_team_size: int = 1

class EventCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    short_description: Optional[str] = Field(None, max_length=300)
    banner_url: Optional[str] = None
    video_url: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime] = None
    max_participants: Optional[int] = Field(None, ge=1)
    is_free: bool = True
    base_price: float = Field(0, ge=0)
    status: EventStatus = EventStatus.draft
    tags: List[str] = []
    is_featured: bool = False
    # admin only: which college owns the event
    college_id: Optional[str] = None

    @field_validator("start_date", "end_date", "registration_deadline")
    @classmethod
    def naive_as_utc(cls, value):
        """Naive input is read as UTC."""
        return as_utc(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    short_description: Optional[str] = Field(None, max_length=300)
    banner_url: Optional[str] = None
    video_url: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    max_participants: Optional[int] = Field(None, ge=1)
    is_free: Optional[bool] = None
    base_price: Optional[float] = Field(None, ge=0)
    status: Optional[EventStatus] = None
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None

    @field_validator("start_date", "end_date", "registration_deadline")
    @classmethod
    def naive_as_utc(cls, value):
        return as_utc(value)

class CollegeSummary(BaseModel):
    id: str
    name: str
    city: Optional[str] = None
    logo_url: Optional[str] = None
    is_verified: bool = False

class EventResponse(BaseModel):
    id: str
    college_id: str
    title: str
    slug: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    banner_url: Optional[str] = None
    video_url: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime] = None
    max_participants: Optional[int] = None
    is_free: bool
    base_price: float
    status: str
    tags: List[str] = []
    is_featured: bool = False
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    college: Optional[CollegeSummary] = None
    sub_events: List[SubEventResponse] = []


# ============================================================
# OPPORTUNITY SCHEMAS
# ============================================================

class OpportunityCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    type: OpportunityType = OpportunityType.job
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    is_remote: bool = False
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    salary_currency: str = "INR"
    application_url: Optional[str] = None
    deadline: Optional[datetime] = None
    is_external: bool = False
    external_source: Optional[str] = None
    external_url: Optional[str] = None
    skills_required: List[str] = []
    experience_level: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    is_featured: bool = False
    # admin only: attach to a company
    company_id: Optional[str] = None

    @model_validator(mode="after")
    def check_listing(self):
        if self.is_external and not self.external_url:
            raise ValueError("external_url is required for external listings")
        if self.salary_min is not None and self.salary_max is not None and self.salary_max < self.salary_min:
            raise ValueError("salary_max must be >= salary_min")
        return self

class OpportunityUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    type: Optional[OpportunityType] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    is_remote: Optional[bool] = None
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    salary_currency: Optional[str] = None
    application_url: Optional[str] = None
    deadline: Optional[datetime] = None
    is_external: Optional[bool] = None
    external_source: Optional[str] = None
    external_url: Optional[str] = None
    skills_required: Optional[List[str]] = None
    experience_level: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

class CompanySummary(BaseModel):
    id: str
    name: str
    logo_url: Optional[str] = None
    industry: Optional[str] = None
    is_verified: bool = False

class OpportunityResponse(BaseModel):
    id: str
    company_id: Optional[str] = None
    created_by: Optional[str] = None
    title: str
    type: str
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    is_remote: bool = False
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: str = "INR"
    application_url: Optional[str] = None
    deadline: Optional[datetime] = None
    is_external: bool = False
    external_source: Optional[str] = None
    external_url: Optional[str] = None
    skills_required: List[str] = []
    experience_level: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    company: Optional[CompanySummary] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(BaseModel):
    id: str
    opportunity_id: str
    user_id: str
    cover_letter: Optional[str] = None
    status: str
    applied_at: datetime
    updated_at: datetime
    opportunity_title: Optional[str] = None
    applicant_name: Optional[str] = None
    applicant_email: Optional[str] = None

class ApplyResponse(BaseModel):
    applied: bool
    redirect_url: Optional[str] = None
    application: Optional[ApplicationResponse] = None


# ============================================================
# REGISTRATION & PAYMENT SCHEMAS
# ============================================================

class RegistrationCreate(BaseModel):
    sub_event_id: Optional[str] = None
    team_name: Optional[str] = None
    team_members: Optional[List[Dict[str, Any]]] = None

class PaymentResponse(BaseModel):
    id: str
    registration_id: str
    user_id: str
    amount: float
    currency: str
    status: str
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime

class RegistrationResponse(BaseModel):
    id: str
    user_id: str
    event_id: str
    sub_event_id: Optional[str] = None
    team_name: Optional[str] = None
    team_members: Optional[List[Dict[str, Any]]] = None
    status: str
    registered_at: datetime
    event_title: Optional[str] = None
    participant_name: Optional[str] = None
    participant_email: Optional[str] = None
    payment: Optional[PaymentResponse] = None


# ============================================================
# CONNECTION & INQUIRY SCHEMAS
# ============================================================

class ConnectionCreate(BaseModel):
    receiver_id: str

class ConnectionRespond(BaseModel):
    status: ConnectionStatus

class ConnectionResponse(BaseModel):
    id: str
    requester_id: str
    receiver_id: str
    status: str
    created_at: datetime
    updated_at: datetime

class ConnectionDetailResponse(ConnectionResponse):
    other_user: Optional[ProfileResponse] = None

class InquiryCreate(BaseModel):
    event_id: Optional[str] = None
    opportunity_id: Optional[str] = None
    subject: str = Field(..., min_length=2, max_length=300)
    message: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_target(self):
        if bool(self.event_id) == bool(self.opportunity_id):
            raise ValueError("Provide exactly one of event_id or opportunity_id")
        return self

class InquiryResponse(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    sender_email: str
    event_id: Optional[str] = None
    opportunity_id: Optional[str] = None
    subject: str
    message: str
    is_read: bool = False
    replied_at: Optional[datetime] = None
    created_at: datetime
    event_title: Optional[str] = None
    opportunity_title: Optional[str] = None


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: str = Field(..., min_length=2, max_length=200)
    role: AppRole = AppRole.student
    phone: Optional[str] = None
    college_name: Optional[str] = None
    graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    organization_name: Optional[str] = None
    city: Optional[str] = None
    industry: Optional[str] = None

class AdminUserResponse(ProfileResponse):
    role: Optional[str] = None

class ActiveUpdate(BaseModel):
    is_active: bool

class VerifyUpdate(BaseModel):
    is_verified: bool

class RoleUpdate(BaseModel):
    role: AppRole

class BulkUserStatus(BaseModel):
    user_ids: List[str] = Field(..., min_length=1)
    is_active: bool

class BulkEventStatus(BaseModel):
    event_ids: List[str] = Field(..., min_length=1)
    status: EventStatus

class BulkOpportunityActive(BaseModel):
    opportunity_ids: List[str] = Field(..., min_length=1)
    is_active: bool

class BulkResult(BaseModel):
    updated: int
    ids: List[str]

class PlatformStatsResponse(BaseModel):
    total_users: int
    students: int
    colleges: int
    companies: int
    admins: int
    active_users: int
    total_events: int
    published_events: int
    total_opportunities: int
    active_opportunities: int
    total_registrations: int
    revenue: float

class ActivityLogResponse(BaseModel):
    id: str
    admin_id: Optional[str] = None
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime


# ============================================================
# STORAGE SCHEMAS
# ============================================================

class UploadResponse(BaseModel):
    bucket: str
    path: str
    public_url: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
