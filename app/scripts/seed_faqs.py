import logging
from app.core.database import db
from app.models.common import FileType, ResourceCategory, utcnow
from app.models.resource import Resource

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def seed_faqs():
    "Seed the resources table with the frequently asked questions shown on the public site"

    # initial FAQ entries, question in title and answer in description
    faqs_data = [
        {
            "title": "What time are the Sunday services?",
            "description": "Sunday services hold at 8:00 and 10:30. Everyone is welcome."
        },
        {
            "title": "How can I become a member of the church?",
            "description": "Attend the newcomers class held on the first Sunday of each month, then fill in the membership form at the welcome desk."
        },
        {
            "title": "How do I submit a prayer request?",
            "description": "Sign in and open the prayer wall. Requests can be public or kept private, and may be anonymous."
        },
        {
            "title": "Can I give online?",
            "description": "Yes. Tithes, offerings and mission gifts can be made by card or mobile money from the donations page, once or on a recurring basis."
        },
        {
            "title": "How do I share a testimony?",
            "description": "Use the testimony form with up to three photos. Testimonies are published after review by the pastoral team."
        },
    ]

    with db.session() as session:
        # check if table already has FAQ entries
        existing_count = session.query(Resource).filter(Resource.category == ResourceCategory.FAQ).count()

        if existing_count > 0:
            logger.info(f"Resources table already has {existing_count} FAQ entries. Skipping seed")
            return

        logger.info("Seeding FAQ resources")

        for order, faq_data in enumerate(faqs_data):
            try:
                faq = Resource(
                    **faq_data,
                    category=ResourceCategory.FAQ,
                    file_type=FileType.NONE,
                    is_published=True,
                    published_at=utcnow(),
                    order=order,
                )
                session.add(faq)
                session.commit()
                logger.info(f"Added FAQ: {faq_data['title']}")
            except Exception as e:
                session.rollback()
                logger.error(f"Error adding FAQ '{faq_data['title']}': {str(e)}")

        logger.info("FAQ seeding completed successfully")

if __name__ == "__main__":
    seed_faqs()
