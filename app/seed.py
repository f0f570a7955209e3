"""Sample data for an empty database."""

import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from models import Note, NoteColor, NoteStatus, Project, User

logger = logging.getLogger(__name__)

SAMPLE_NOTES = [
    # (content, color, status, project index, user index)
    ("Setup project structure and dependencies", NoteColor.BLUE, NoteStatus.DONE, 0, 0),
    ("Design user authentication flow", NoteColor.YELLOW, NoteStatus.DOING, 0, 0),
    ("Implement API endpoints for user management", NoteColor.PINK, NoteStatus.BACKLOG, 0, 1),
    ("Create responsive navigation component", NoteColor.GREEN, NoteStatus.DOING, 1, 1),
    ("Update brand colors and typography", NoteColor.YELLOW, NoteStatus.BACKLOG, 1, None),
]


async def seed_database(db: AsyncSession) -> bool:
    """Insert two users, two projects and five notes unless projects already exist.

    Returns:
        bool: True when sample data was written
    """
    existing = (await db.execute(select(func.count(Project.id)))).scalar_one()
    if existing > 0:
        logger.info("Database already has data, skipping seed")
        return False

    logger.info("Seeding database with sample data")
    users = [User(name="John Doe"), User(name="Jane Smith")]
    projects = [Project(name="Mobile App Development"), Project(name="Website Redesign")]
    db.add_all(users + projects)
    await db.flush()

    db.add_all(
        [
            Note(
                content=content,
                color=color,
                status=status,
                project_id=projects[project_index].id,
                user_id=users[user_index].id if user_index is not None else None,
            )
            for content, color, status, project_index, user_index in SAMPLE_NOTES
        ]
    )
    await db.commit()
    logger.info("Database seeded: %d users, %d projects, %d notes", len(users), len(projects), len(SAMPLE_NOTES))
    return True
