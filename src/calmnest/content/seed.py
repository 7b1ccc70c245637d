"""Sample data seeding: an admin, five demo users and a starter content catalogue.

Run with ``python -m calmnest.content.seed`` or the ``calmnest-seed`` script.
Wipes users, sessions and content first, so every run leaves the same dataset.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.auth.password import hash_password
from calmnest.config import get_settings
from calmnest.database import close_db, get_session_factory, init_db, init_models
from calmnest.db.models import AudioContent, ReadingContent, User, UserSession, YogaContent

logger = logging.getLogger(__name__)

ADMIN_SEED: dict = {
    "username": "admin",
    "email": "admin@calmnest.com",
    "password": "admin123",
    "first_name": "Admin",
    "last_name": "User",
    "age": 30,
    "role": "admin",
    "is_verified": True,
}

SAMPLE_USER_COUNT = 5

AUDIO_SEED_DATA: list[dict] = [
    {
        "title": "Ocean Waves Meditation",
        "description": "Calming ocean sounds to help you relax and find inner peace",
        "category": "nature-sounds",
        "audio_url": "/sample-audio/ocean-waves.mp3",
        "duration": 1800,
        "artist": "Nature Sounds",
        "tags": ["relaxation", "meditation", "ocean", "calm"],
    },
    {
        "title": "Daily Affirmations for Success",
        "description": "Positive affirmations to start your day with confidence",
        "category": "affirmations",
        "audio_url": "/sample-audio/daily-affirmations.mp3",
        "duration": 900,
        "artist": "CalmNest Team",
        "tags": ["motivation", "success", "confidence", "morning"],
    },
    {
        "title": "Stress Relief Classical Music",
        "description": "Beautiful classical compositions for stress relief",
        "category": "music",
        "audio_url": "/sample-audio/classical-stress-relief.mp3",
        "duration": 2700,
        "artist": "Various Artists",
        "tags": ["classical", "stress-relief", "peaceful"],
    },
    {
        "title": "Mindfulness Meditation Podcast",
        "description": "Learn the basics of mindfulness meditation",
        "category": "podcast",
        "audio_url": "/sample-audio/mindfulness-podcast.mp3",
        "duration": 1200,
        "artist": "Dr. Sarah Johnson",
        "tags": ["mindfulness", "meditation", "education"],
    },
    {
        "title": "Rain Forest Sounds",
        "description": "Natural rainforest ambiance for deep relaxation",
        "category": "nature-sounds",
        "audio_url": "/sample-audio/rainforest.mp3",
        "duration": 3600,
        "artist": "Nature Sounds",
        "tags": ["nature", "rain", "forest", "ambient"],
    },
]

READING_SEED_DATA: list[dict] = [
    {
        "title": "Daily Motivation Quote",
        "content": "The only way to do great work is to love what you do. - Steve Jobs",
        "category": "quotes",
        "author": "Steve Jobs",
        "tags": ["motivation", "work", "success"],
    },
    {
        "title": "5 Ways to Reduce Stress",
        "content": (
            "Stress is a common part of life, but it doesn't have to control you.\n\n"
            "1. Practice deep breathing: inhale for 4 counts, hold for 7, exhale for 8.\n"
            "2. Exercise regularly: even a 10-minute walk can make a difference.\n"
            "3. Practice mindfulness: five minutes of meditation a day helps.\n"
            "4. Get quality sleep: aim for 7-9 hours per night.\n"
            "5. Connect with others: social support is crucial for well-being."
        ),
        "category": "articles",
        "author": "CalmNest Team",
        "tags": ["stress-management", "wellness", "mental-health"],
    },
    {
        "title": "The Power of Positive Thinking",
        "content": "Keep your face always toward the sunshine, and shadows will fall behind you. - Walt Whitman",
        "category": "quotes",
        "author": "Walt Whitman",
        "tags": ["positivity", "optimism", "inspiration"],
    },
    {
        "title": "Self-Love Affirmations",
        "content": (
            "I am worthy of love and respect\n"
            "I accept myself completely as I am\n"
            "I treat myself with kindness and compassion\n"
            "I deserve happiness and peace"
        ),
        "category": "affirmations",
        "author": "CalmNest Team",
        "tags": ["self-love", "affirmations", "confidence"],
    },
    {
        "title": "The Peaceful Garden",
        "content": (
            "In a quiet corner of the world, there lived an old gardener named Maya. "
            "She believed that gardens, like minds, needed constant care: remove the weeds of worry, "
            "water the seeds of hope, and let gratitude warm every corner."
        ),
        "category": "stories",
        "author": "CalmNest Team",
        "tags": ["peace", "mindfulness", "inspiration", "story"],
    },
]

YOGA_SEED_DATA: list[dict] = [
    {
        "title": "Morning Sun Salutation",
        "description": "Start your day with this energizing sequence of yoga poses",
        "video_url": "/sample-videos/sun-salutation.mp4",
        "image_url": "/sample-images/sun-salutation.jpg",
        "instructions": [
            "Start in Mountain Pose (Tadasana)",
            "Inhale and sweep arms overhead",
            "Exhale and fold forward into Uttanasana",
            "Step back into Plank and lower to Chaturanga",
            "Inhale into Upward Facing Dog",
            "Exhale into Downward Facing Dog and hold for 5 breaths",
        ],
        "duration": 15,
        "difficulty": "beginner",
        "category": "full-routine",
        "benefits": ["Increases energy and focus", "Improves flexibility", "Strengthens core muscles"],
    },
    {
        "title": "Deep Breathing Exercise",
        "description": "Simple breathing technique to calm your mind and reduce stress",
        "image_url": "/sample-images/breathing-exercise.jpg",
        "instructions": [
            "Sit comfortably with your back straight",
            "Breathe in slowly through your nose for 4 counts",
            "Hold your breath for 4 counts",
            "Exhale slowly through your mouth for 6 counts",
            "Repeat for 10-15 cycles",
        ],
        "duration": 10,
        "difficulty": "beginner",
        "category": "breathing",
        "benefits": ["Reduces stress and anxiety", "Lowers blood pressure", "Promotes better sleep"],
    },
    {
        "title": "Gentle Neck and Shoulder Stretches",
        "description": "Release tension from your neck and shoulders with these gentle stretches",
        "image_url": "/sample-images/neck-stretches.jpg",
        "instructions": [
            "Sit tall with shoulders relaxed",
            "Tilt your head to the right and hold for 15 seconds",
            "Return to center and tilt to the left",
            "Roll your shoulders backward, then forward, 5 times each",
        ],
        "duration": 8,
        "difficulty": "beginner",
        "category": "stretching",
        "benefits": ["Relieves neck and shoulder tension", "Improves posture", "Reduces headaches"],
    },
    {
        "title": "Evening Relaxation Sequence",
        "description": "Wind down with this calming yoga sequence perfect for bedtime",
        "video_url": "/sample-videos/evening-yoga.mp4",
        "image_url": "/sample-images/evening-yoga.jpg",
        "instructions": [
            "Begin in Child's Pose, breathe deeply",
            "Move into gentle Cat-Cow stretches",
            "Transition to Seated Forward Fold",
            "End in Savasana for 5-10 minutes",
        ],
        "duration": 20,
        "difficulty": "beginner",
        "category": "full-routine",
        "benefits": ["Promotes better sleep", "Releases physical tension", "Calms the nervous system"],
    },
    {
        "title": "Mindful Meditation Sitting",
        "description": "Learn proper posture and technique for mindfulness meditation",
        "image_url": "/sample-images/meditation-pose.jpg",
        "instructions": [
            "Choose a quiet, comfortable space",
            "Keep your spine straight but not rigid",
            "Begin to notice your natural breath",
            "When thoughts arise, gently return to breath",
        ],
        "duration": 25,
        "difficulty": "intermediate",
        "category": "meditation",
        "benefits": ["Improves focus and concentration", "Enhances emotional regulation", "Promotes inner peace"],
    },
]


def _make_user(data: dict, now: datetime) -> User:
    fields = {k: v for k, v in data.items() if k != "password"}
    return User(
        **fields,
        password_hash=hash_password(data["password"]),
        sessions_completed=0,
        total_time_spent=0.0,
        last_active=now,
        created_at=now,
        updated_at=now,
    )


def sample_users() -> list[dict]:
    return [
        {
            "username": f"user{i}",
            "email": f"user{i}@example.com",
            "password": f"user{i}123",
            "first_name": f"User{i}",
            "last_name": "Test",
            "age": 20 + i,
            "preferences": {
                "favorite_therapies": ["audio", "reading"],
                "music_genres": ["classical", "nature"],
                "book_categories": ["motivational", "self-help"],
            },
        }
        for i in range(1, SAMPLE_USER_COUNT + 1)
    ]


async def seed_database(db: AsyncSession) -> dict[str, int]:
    """Replace all users, sessions and content with the sample dataset. Returns per-kind counts."""
    for model in (UserSession, AudioContent, ReadingContent, YogaContent, User):
        await db.execute(delete(model))
    logger.info("Cleared existing data")

    now = datetime.now(timezone.utc)
    admin = _make_user(ADMIN_SEED, now)
    db.add(admin)
    users = [_make_user(data, now) for data in sample_users()]
    db.add_all(users)
    await db.flush()

    db.add_all(AudioContent(**data, uploaded_by=admin.id, created_at=now) for data in AUDIO_SEED_DATA)
    db.add_all(ReadingContent(**data, uploaded_by=admin.id, created_at=now) for data in READING_SEED_DATA)
    db.add_all(YogaContent(**data, uploaded_by=admin.id, created_at=now) for data in YOGA_SEED_DATA)
    await db.commit()

    counts = {
        "users": len(users) + 1,
        "audio": len(AUDIO_SEED_DATA),
        "reading": len(READING_SEED_DATA),
        "yoga": len(YOGA_SEED_DATA),
    }
    logger.info("Seeded database: %s", counts)
    return counts


async def _run() -> None:
    settings = get_settings()
    await init_db(settings.database_url)
    try:
        await init_models()
        async with get_session_factory()() as db:
            await seed_database(db)
    finally:
        await close_db()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(_run())


if __name__ == "__main__":
    main()
