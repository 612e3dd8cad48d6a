import enum
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# enums
class EventType(str, enum.Enum):
    SERVICE = "service"
    MEETING = "meeting"
    SPECIAL = "special"
    YOUTH = "youth"
    PRAYER = "prayer"

class PrayerStatus(str, enum.Enum):
    ACTIVE = "active"
    ANSWERED = "answered"
    ARCHIVED = "archived"

class BlogPostStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class Currency(str, enum.Enum):
    USD = "USD"
    EUR = "EUR"
    CAD = "CAD"
    XAF = "XAF"

class DonationType(str, enum.Enum):
    TITHE = "tithe"
    OFFERING = "offering"
    MISSION = "mission"
    BUILDING = "building"
    OTHER = "other"

class PaymentMethod(str, enum.Enum):
    CARD = "card"
    BANK = "bank"
    CASH = "cash"
    CHECK = "check"
    MOBILE = "mobile"

class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"

class RecurrenceFrequency(str, enum.Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

class MembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    SUSPENDED = "suspended"

class MemberRole(str, enum.Enum):
    ADMIN = "admin"
    PASTOR = "pastor"
    LEADER = "leader"
    MEMBER = "member"
    VOLUNTEER = "volunteer"

class TestimonyCategory(str, enum.Enum):
    GUERISON = "guerison"
    FAMILLE = "famille"
    FINANCES = "finances"
    DELIVRANCE = "delivrance"
    MIRACLE = "miracle"
    TRANSFORMATION = "transformation"
    AUTRE = "autre"

class TestimonyStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"
    REJECTED = "rejected"

class ResourceCategory(str, enum.Enum):
    BOOK = "book"
    BROCHURE = "brochure"
    SONG = "song"
    FAQ = "faq"
    OTHER = "other"

class FileType(str, enum.Enum):
    PDF = "pdf"
    AUDIO = "audio"
    VIDEO = "video"
    TEXT = "text"
    IMAGE = "image"
    NONE = "none"
