"""
Demo data loader.
Wipes every table and fills the database with demo users, projects and tasks.
"""
from __future__ import annotations

import logging
import random
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.config import settings
from taskflow.core.security import hash_password
from taskflow.core.time_utils import utc_now
from taskflow.crud.activity_log import crud_activity_log
from taskflow.crud.comment import crud_comment
from taskflow.crud.project import crud_project
from taskflow.crud.task import crud_task
from taskflow.crud.user import crud_user
from taskflow.models.project import Project, project_members
from taskflow.models.task import Subtask, Task
from taskflow.models.user import User
from taskflow.schemas.analytics import SeedSummary

logger = logging.getLogger(__name__)

DEMO_USERS = [
    "John Doe",
    "Jane Smith",
    "Bob Johnson",
    "Alice Williams",
    "Charlie Brown",
    "Diana Prince",
    "Eve Davis",
    "Frank Miller",
    "Grace Lee",
    "Henry Wilson",
]

PROJECT_TEMPLATES = [
    ("Website Redesign", "Complete overhaul of company website with modern design", "active"),
    ("Mobile App Development", "Build native mobile app for iOS and Android", "active"),
    ("E-commerce Platform", "Launch new e-commerce platform with payment integration", "active"),
    ("Marketing Campaign Q1", "Digital marketing campaign for Q1", "completed"),
    ("Cloud Migration", "Migrate infrastructure to cloud services", "active"),
    ("Data Analytics Dashboard", "Build comprehensive analytics dashboard for business insights", "active"),
    ("API Integration", "Integrate third-party APIs for payment and shipping", "active"),
    ("Security Audit", "Complete security audit and implement recommendations", "completed"),
    ("Customer Portal", "Self-service customer portal for support tickets", "active"),
    ("Internal Tools", "Build internal tools for team productivity", "archived"),
    ("Documentation Project", "Create comprehensive documentation for all products", "active"),
    ("Performance Optimization", "Optimize application performance and reduce load times", "active"),
    ("User Research Initiative", "Conduct user research and gather feedback", "active"),
    ("Design System", "Create unified design system for all products", "completed"),
    ("Automated Testing", "Implement comprehensive automated testing suite", "active"),
]

TASK_TEMPLATES = [
    ("Design mockups", "high", "completed"),
    ("Set up development environment", "high", "completed"),
    ("Database schema design", "high", "in-progress"),
    ("API endpoint implementation", "medium", "in-progress"),
    ("Frontend component development", "medium", "todo"),
    ("Write unit tests", "medium", "todo"),
    ("Integration testing", "low", "todo"),
    ("Code review", "high", "todo"),
    ("Deploy to staging", "high", "todo"),
    ("User acceptance testing", "medium", "todo"),
    ("Performance testing", "medium", "todo"),
    ("Documentation updates", "low", "todo"),
    ("Security review", "high", "todo"),
    ("Bug fixes", "medium", "in-progress"),
    ("Feature enhancements", "low", "todo"),
]


async def wipe_all(db: AsyncSession) -> None:
    """Delete every row, children before parents."""
    await crud_comment.remove_all(db)
    await db.execute(delete(Subtask))
    await crud_task.remove_all(db)
    await crud_activity_log.remove_all(db)
    await db.execute(delete(project_members))
    await crud_project.remove_all(db)
    await crud_user.remove_all(db)
    # Bulk deletes bypass the identity map
    db.expunge_all()


async def seed_demo_data(
    db: AsyncSession, *, rng: random.Random | None = None
) -> SeedSummary:
    """
    Replace all data with demo content: 10 users sharing one password,
    15 projects with 1-4 members each, and 3-10 tasks per project.
    """
    rng = rng or random.Random()
    await wipe_all(db)

    # One hash for every demo account; bcrypt is slow on purpose
    hashed = hash_password(settings.SEED_PASSWORD)
    users = [
        User(name=name, email=f"user{index}@example.com", hashed_password=hashed)
        for index, name in enumerate(DEMO_USERS, start=1)
    ]
    db.add_all(users)
    await db.flush()

    projects: list[Project] = []
    for name, description, status in PROJECT_TEMPLATES:
        owner = rng.choice(users)
        others = [user for user in users if user.id != owner.id]
        project = Project(
            name=name,
            description=description,
            status=status,
            owner_id=owner.id,
        )
        project.members = rng.sample(others, rng.randint(1, 4))
        db.add(project)
        projects.append(project)
    await db.flush()

    now = utc_now()
    task_count = 0
    for project in projects:
        people = [user for user in users if user.id == project.owner_id] + list(project.members)
        for _ in range(rng.randint(3, 10)):
            title, priority, status = rng.choice(TASK_TEMPLATES)
            assignee = rng.choice(people) if rng.random() > 0.3 else None
            due_date = (
                now + timedelta(days=rng.randint(-10, 19)) if rng.random() > 0.5 else None
            )
            db.add(
                Task(
                    title=title,
                    description=f"Task description for {title} in {project.name}",
                    status=status,
                    priority=priority,
                    project_id=project.id,
                    assigned_to_id=assignee.id if assignee else None,
                    created_by_id=project.owner_id,
                    due_date=due_date,
                    labels=[],
                    tags=[],
                )
            )
            task_count += 1
    await db.flush()

    summary = SeedSummary(users=len(users), projects=len(projects), tasks=task_count)
    logger.info(
        "Seeded demo data: %d users, %d projects, %d tasks",
        summary.users,
        summary.projects,
        summary.tasks,
    )
    return summary
