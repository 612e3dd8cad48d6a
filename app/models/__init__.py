from app.models.event import Event
from app.models.sermon import Sermon
from app.models.prayer_request import PrayerRequest
from app.models.blog_post import BlogPost
from app.models.donation import Donation
from app.models.member import Member
from app.models.testimony import Testimony
from app.models.resource import Resource

# This makes it easy to import all models at once
__all__ = ["Event", "Sermon", "PrayerRequest", "BlogPost", "Donation", "Member", "Testimony", "Resource"]
