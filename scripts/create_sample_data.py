"""
Script to seed a development database with species, users and records.

Observation records normally arrive from the mobile app; this fills the
tables so the review and curation screens have something to show.
Run: python scripts/create_sample_data.py
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lepinet.db.database import AsyncSessionLocal, init_db
from lepinet.core.security import get_password_hash
from lepinet.models import (
    ConfidenceLevel,
    ExpertReview,
    ObservationRecord,
    Species,
    TrainingStatus,
    User,
    UserRole,
    VerificationStatus,
)

SAMPLE_PASSWORD = "lepinet123"

SPECIES = [
    {
        "butterfly_id": "BF001",
        "common_name_english": "Common Mormon",
        "common_name_sinhalese": "Podu Mormon",
        "species_name_binomial": "Papilio polytes",
        "species_name_trinomial": "Papilio polytes romulus",
        "family": "Papilionidae",
    },
    {
        "butterfly_id": "BF002",
        "common_name_english": "Blue Mormon",
        "common_name_sinhalese": "Nil Mormon",
        "species_name_binomial": "Papilio polymnestor",
        "species_name_trinomial": "Papilio polymnestor parinda",
        "family": "Papilionidae",
    },
    {
        "butterfly_id": "BF003",
        "common_name_english": "Lemon Pansy",
        "common_name_sinhalese": "Dehi Pansy",
        "species_name_binomial": "Junonia lemonias",
        "species_name_trinomial": None,
        "family": "Nymphalidae",
    },
    {
        "butterfly_id": "BF004",
        "common_name_english": "Common Jezebel",
        "common_name_sinhalese": "Podu Jezebel",
        "species_name_binomial": "Delias eucharis",
        "species_name_trinomial": None,
        "family": "Pieridae",
    },
]

USERS = [
    ("admin@lepinet.dev", "Site", "Admin", UserRole.ADMIN, VerificationStatus.VERIFIED),
    ("expert@lepinet.dev", "Nimal", "Perera", UserRole.EXPERT, VerificationStatus.VERIFIED),
    ("applicant@lepinet.dev", "Kamala", "Silva", UserRole.USER, VerificationStatus.PENDING),
    ("observer@lepinet.dev", "Ruwan", "Fernando", UserRole.USER, VerificationStatus.NONE),
]

# (species index, confidence, user action)
RECORDS = [
    (0, 0.94, "accepted"),
    (1, 0.81, "accepted"),
    (2, 0.55, "unsure"),
    (3, 0.97, "accepted"),
    (0, 0.42, "rejected"),
]


async def create_sample_data():
    """Create species, users, records and one expert review."""
    print("Creating sample data...")

    async with AsyncSessionLocal() as db:
        print(f"Creating {len(SPECIES)} species...")
        for data in SPECIES:
            db.add(Species(**data))

        print(f"Creating {len(USERS)} users (password: {SAMPLE_PASSWORD})...")
        users = {}
        for email, first_name, last_name, role, status in USERS:
            user = User(
                email=email,
                password_hash=get_password_hash(SAMPLE_PASSWORD),
                first_name=first_name,
                last_name=last_name,
                role=role,
                verification_status=status,
            )
            db.add(user)
            users[email] = user
        await db.flush()

        print(f"Creating {len(RECORDS)} observation records...")
        observer = users["observer@lepinet.dev"]
        records = []
        for index, (species_index, confidence, action) in enumerate(RECORDS, start=1):
            species = SPECIES[species_index]
            record = ObservationRecord(
                user_id=observer.id,
                image_url=f"https://picsum.photos/seed/lepinet{index}/800/600",
                predicted_id=species["butterfly_id"],
                predicted_species_name=species["common_name_english"],
                predicted_confidence=confidence,
                user_action=action,
            )
            db.add(record)
            records.append(record)
        await db.flush()

        expert = users["expert@lepinet.dev"]
        db.add(
            ExpertReview(
                ai_log_id=records[0].id,
                reviewer_id=expert.id,
                agreed_with_ai=True,
                identified_species_name=records[0].predicted_species_name,
                confidence_level=ConfidenceLevel.CERTAIN,
                training_status=TrainingStatus.PENDING,
            )
        )

        await db.commit()

        print(f"✓ Created {len(SPECIES)} species, {len(USERS)} users, {len(RECORDS)} records")
        print("  - 1 expert review waiting for training curation")
        print("\nSign in as admin@lepinet.dev to curate training candidates.")


async def main():
    """Main entry point."""
    print("Initializing database...")
    await init_db()
    print("✓ Database initialized\n")

    await create_sample_data()


if __name__ == "__main__":
    asyncio.run(main())
