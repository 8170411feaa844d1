"""Language, dialect and daily-challenge seed data."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Dialect, Language, SeedWord
from boli.db.upsert import upsert_insert

logger = logging.getLogger(__name__)

LANGUAGE_SEED_DATA: list[dict] = [
    {"name": "Punjabi", "native_name": "پنجابی", "region": "Punjab", "iso_code": "pnb", "speakers_estimate": "80M+"},
    {"name": "Sindhi", "native_name": "سنڌي", "region": "Sindh", "iso_code": "snd", "speakers_estimate": "30M+"},
    {"name": "Pashto", "native_name": "پښتو", "region": "Khyber Pakhtunkhwa", "iso_code": "pbu", "speakers_estimate": "30M+"},
    {"name": "Saraiki", "native_name": "سرائیکی", "region": "South Punjab", "iso_code": "skr", "speakers_estimate": "25M+"},
    {"name": "Balochi", "native_name": "بلوچی", "region": "Balochistan", "iso_code": "bal", "speakers_estimate": "8M+"},
]

# (dialect name, region, language name)
DIALECT_SEED_DATA: list[tuple[str, str, str]] = [
    ("Majhi", "Lahore", "Punjabi"),
    ("Pothwari", "Rawalpindi", "Punjabi"),
    ("Jhangvi", "Jhang", "Punjabi"),
    ("Vicholi", "Hyderabad", "Sindhi"),
    ("Lari", "Thatta", "Sindhi"),
    ("Yusufzai", "Peshawar", "Pashto"),
    ("Kandahari", "Quetta", "Pashto"),
    ("Multani", "Multan", "Saraiki"),
    ("Derawali", "Dera Ghazi Khan", "Saraiki"),
    ("Makrani", "Makran", "Balochi"),
    ("Rakhshani", "Kharan", "Balochi"),
]

SEED_WORD_DATA: list[dict] = [
    {"word_en": "water", "word_ur": "پانی", "category": "nature"},
    {"word_en": "bread", "word_ur": "روٹی", "category": "food"},
    {"word_en": "mother", "word_ur": "ماں", "category": "family"},
    {"word_en": "father", "word_ur": "باپ", "category": "family"},
    {"word_en": "house", "word_ur": "گھر", "category": "home"},
    {"word_en": "rain", "word_ur": "بارش", "category": "nature"},
    {"word_en": "milk", "word_ur": "دودھ", "category": "food"},
    {"word_en": "brother", "word_ur": "بھائی", "category": "family"},
    {"word_en": "sister", "word_ur": "بہن", "category": "family"},
    {"word_en": "door", "word_ur": "دروازہ", "category": "home"},
    {"word_en": "sun", "word_ur": "سورج", "category": "nature"},
    {"word_en": "salt", "word_ur": "نمک", "category": "food"},
]


async def seed_catalog(db: AsyncSession) -> int:
    """Upsert languages, dialects and seed words. Returns rows seeded."""
    seeded = 0
    for language in LANGUAGE_SEED_DATA:
        stmt = upsert_insert(db, Language).values(**language)
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
        seeded += 1

    languages = {
        lang.name: lang.id
        for lang in (await db.execute(select(Language))).scalars()
    }
    for name, region, language_name in DIALECT_SEED_DATA:
        stmt = upsert_insert(db, Dialect).values(
            name=name, region=region, language_id=languages.get(language_name),
        )
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
        seeded += 1

    for word in SEED_WORD_DATA:
        stmt = upsert_insert(db, SeedWord).values(**word)
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["word_en"]))
        seeded += 1

    await db.commit()
    logger.info("Seeded %d catalog rows", seeded)
    return seeded
