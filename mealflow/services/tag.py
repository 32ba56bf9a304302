from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mealflow.models.recipe import Tag as TagModel


def _normalize(names: List[str]) -> List[str]:
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


async def get_or_create_tags(db: AsyncSession, names: List[str]) -> List[TagModel]:
    """
    Tags for the given names, creating the missing ones.

    Blank names and duplicates are dropped; the result follows input order.
    The caller commits.
    """
    names = _normalize(names)
    if not names:
        return []

    result = await db.execute(select(TagModel).where(TagModel.name.in_(names)))
    existing = {tag.name: tag for tag in result.scalars().all()}

    tags = []
    for name in names:
        tag = existing.get(name)
        if tag is None:
            tag = TagModel(name=name)
            db.add(tag)
            existing[name] = tag
        tags.append(tag)
    await db.flush()
    return tags
