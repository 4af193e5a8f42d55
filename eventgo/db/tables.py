"""
Table definitions (SQLAlchemy Core).

Every entity the marketplace persists lives here. Routes never use an ORM;
they go through the table-scoped helpers in ``eventgo.db.query`` or, for
reports, raw SQL via ``execute_raw_sql``.

List-valued columns (tags, skills) are JSON so the same schema runs on
PostgreSQL and on the SQLite database used by the tests.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, MetaData,
    String, Table, Text, UniqueConstraint,
)

metadata = MetaData()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value):
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _id_column() -> Column:
    return Column("id", String(36), primary_key=True, default=new_id)


def _timestamps() -> list:
    return [
        Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
        Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
    ]


# ============================================================
# ACCOUNTS
# ============================================================

users = Table(
    "users", metadata,
    _id_column(),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)

profiles = Table(
    "profiles", metadata,
    _id_column(),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("full_name", String(200), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(30)),
    Column("avatar_url", Text),
    Column("bio", Text),
    Column("college_name", String(200)),
    Column("graduation_year", Integer),
    Column("skills", JSON),
    Column("resume_url", Text),
    Column("linkedin_url", Text),
    Column("github_url", Text),
    Column("is_active", Boolean, nullable=False, default=True),
    *_timestamps(),
)

user_roles = Table(
    "user_roles", metadata,
    _id_column(),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("role", String(20), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)


# ============================================================
# ORGANIZATIONS
# ============================================================

colleges = Table(
    "colleges", metadata,
    _id_column(),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
    Column("short_name", String(50)),
    Column("logo_url", Text),
    Column("website", Text),
    Column("address", Text),
    Column("city", String(100)),
    Column("state", String(100)),
    Column("country", String(100), default="India"),
    Column("description", Text),
    Column("established_year", Integer),
    Column("is_verified", Boolean, nullable=False, default=False),
    Column("is_active", Boolean, nullable=False, default=True),
    *_timestamps(),
)

companies = Table(
    "companies", metadata,
    _id_column(),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
    Column("logo_url", Text),
    Column("website", Text),
    Column("industry", String(100)),
    Column("size", String(50)),
    Column("headquarters", String(200)),
    Column("description", Text),
    Column("is_verified", Boolean, nullable=False, default=False),
    Column("is_active", Boolean, nullable=False, default=True),
    *_timestamps(),
)


# ============================================================
# EVENTS
# ============================================================

events = Table(
    "events", metadata,
    _id_column(),
    Column("college_id", String(36), ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("slug", String(220)),
    Column("description", Text),
    Column("short_description", String(300)),
    Column("banner_url", Text),
    Column("video_url", Text),
    Column("venue", String(200)),
    Column("city", String(100)),
    Column("start_date", DateTime(timezone=True), nullable=False),
    Column("end_date", DateTime(timezone=True), nullable=False),
    Column("registration_deadline", DateTime(timezone=True)),
    Column("max_participants", Integer),
    Column("is_free", Boolean, nullable=False, default=True),
    Column("base_price", Float, nullable=False, default=0),
    Column("status", String(20), nullable=False, default="draft"),
    Column("tags", JSON),
    Column("is_featured", Boolean, nullable=False, default=False),
    Column("view_count", Integer, nullable=False, default=0),
    *_timestamps(),
)

sub_events = Table(
    "sub_events", metadata,
    _id_column(),
    Column("event_id", String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text),
    Column("venue", String(200)),
    Column("start_time", DateTime(timezone=True), nullable=False),
    Column("end_time", DateTime(timezone=True), nullable=False),
    Column("max_participants", Integer),
    Column("price", Float, nullable=False, default=0),
    Column("is_team_event", Boolean, nullable=False, default=False),
    Column("min_team_size", Integer, nullable=False, default=1),
    Column("max_team_size", Integer, nullable=False, default=1),
    *_timestamps(),
)


# ============================================================
# OPPORTUNITIES
# ============================================================

opportunities = Table(
    "opportunities", metadata,
    _id_column(),
    Column("company_id", String(36), ForeignKey("companies.id", ondelete="SET NULL")),
    Column("created_by", String(36), ForeignKey("users.id", ondelete="SET NULL")),
    Column("title", String(200), nullable=False),
    Column("type", String(20), nullable=False),
    Column("description", Text),
    Column("requirements", Text),
    Column("location", String(200)),
    Column("is_remote", Boolean, nullable=False, default=False),
    Column("salary_min", Float),
    Column("salary_max", Float),
    Column("salary_currency", String(10), nullable=False, default="INR"),
    Column("application_url", Text),
    Column("deadline", DateTime(timezone=True)),
    Column("is_external", Boolean, nullable=False, default=False),
    Column("external_source", String(100)),
    Column("external_url", Text),
    Column("skills_required", JSON),
    Column("experience_level", String(50)),
    Column("image_url", Text),
    Column("video_url", Text),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("is_featured", Boolean, nullable=False, default=False),
    Column("view_count", Integer, nullable=False, default=0),
    *_timestamps(),
)

applications = Table(
    "applications", metadata,
    _id_column(),
    Column("opportunity_id", String(36), ForeignKey("opportunities.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("cover_letter", Text),
    Column("status", String(20), nullable=False, default="applied"),
    Column("applied_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow),
    UniqueConstraint("opportunity_id", "user_id", name="uq_application_per_user"),
)


# ============================================================
# REGISTRATIONS & PAYMENTS
# ============================================================

registrations = Table(
    "registrations", metadata,
    _id_column(),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("event_id", String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
    Column("sub_event_id", String(36), ForeignKey("sub_events.id", ondelete="SET NULL")),
    Column("team_name", String(200)),
    Column("team_members", JSON),
    Column("status", String(20), nullable=False, default="pending"),
    Column("registered_at", DateTime(timezone=True), nullable=False, default=utcnow),
    UniqueConstraint("user_id", "event_id", name="uq_registration_per_user"),
)

payments = Table(
    "payments", metadata,
    _id_column(),
    Column("registration_id", String(36), ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False, unique=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("amount", Float, nullable=False),
    Column("currency", String(10), nullable=False, default="INR"),
    Column("status", String(20), nullable=False, default="pending"),
    Column("payment_method", String(50)),
    Column("payment_gateway", String(50)),
    Column("transaction_id", String(100)),
    Column("gateway_response", JSON),
    Column("paid_at", DateTime(timezone=True)),
    *_timestamps(),
)


# ============================================================
# SOCIAL
# ============================================================

connections = Table(
    "connections", metadata,
    _id_column(),
    Column("requester_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("receiver_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    # "{smaller id}:{larger id}", one row per unordered pair
    Column("pair_key", String(73), nullable=False, unique=True),
    Column("status", String(20), nullable=False, default="pending"),
    *_timestamps(),
)

inquiries = Table(
    "inquiries", metadata,
    _id_column(),
    Column("sender_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("sender_name", String(200), nullable=False),
    Column("sender_email", String(255), nullable=False),
    Column("event_id", String(36), ForeignKey("events.id", ondelete="CASCADE")),
    Column("opportunity_id", String(36), ForeignKey("opportunities.id", ondelete="CASCADE")),
    Column("subject", String(300), nullable=False),
    Column("message", Text, nullable=False),
    Column("is_read", Boolean, nullable=False, default=False),
    Column("replied_at", DateTime(timezone=True)),
    *_timestamps(),
)


# ============================================================
# ADMIN
# ============================================================

admin_activity_logs = Table(
    "admin_activity_logs", metadata,
    _id_column(),
    Column("admin_id", String(36), ForeignKey("users.id", ondelete="SET NULL")),
    Column("action", String(100), nullable=False),
    Column("entity_type", String(50)),
    Column("entity_id", String(36)),
    Column("details", JSON),
    Column("ip_address", String(64)),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)
