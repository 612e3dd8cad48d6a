from fastapi import APIRouter
from app.api.v1.routes import health
from app.api.v1.routes import events, sermons, prayer_requests, blog
from app.api.v1.routes import donations, members, testimonies, resources


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])

api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(sermons.router, prefix="/sermons", tags=["sermons"])
api_router.include_router(prayer_requests.router, prefix="/prayer-requests", tags=["prayer requests"])
api_router.include_router(blog.router, prefix="/blog", tags=["blog"])

api_router.include_router(donations.router, prefix="/donations", tags=["donations"])
api_router.include_router(members.router, prefix="/members", tags=["members"])
api_router.include_router(testimonies.router, prefix="/testimonies", tags=["testimonies"])
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
