"""Resolve category names to cached flavor taxonomies."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flavorwheel.models.category_taxonomy import CategoryTaxonomy
from flavorwheel.schemas.taxonomy import TaxonomyPayload
from flavorwheel.services.ai.taxonomy_generator import AITaxonomyGenerator
from flavorwheel.services.exceptions import AIExtractionError
from flavorwheel.services.taxonomy_templates import template_taxonomy

logger = logging.getLogger(__name__)


def normalize_category_name(category_name: str) -> str:
    """Lookup key for a category name."""
    return " ".join((category_name or "").lower().split())


@dataclass
class ResolvedTaxonomy:
    category_name: str
    normalized_name: str
    taxonomy: TaxonomyPayload
    cached: bool
    usage_count: int


class TaxonomyResolver:
    """Get-or-create for CategoryTaxonomy rows.

    Misses are filled by the AI generator when it is available and by the
    fixed template heuristic otherwise. A concurrent writer that commits
    first wins; this resolver then returns that row.
    """

    def __init__(self, db: Session, generator: Optional[AITaxonomyGenerator] = None):
        self.db = db
        self.generator = generator

    def lookup(self, category_name: str) -> Optional[TaxonomyPayload]:
        """Return the cached payload for a category without generating one."""
        normalized = normalize_category_name(category_name)
        if not normalized:
            return None
        row = self._get(normalized)
        if row is None:
            return None
        return TaxonomyPayload.model_validate(row.taxonomy_data)

    async def resolve(self, category_name: str, force_regenerate: bool = False) -> ResolvedTaxonomy:
        """Return the taxonomy for ``category_name``, generating it on a miss.

        Args:
            category_name: Category as entered by the user
            force_regenerate: Replace any cached taxonomy with a fresh one

        Returns:
            ResolvedTaxonomy with ``cached`` true on a cache hit
        """
        normalized = normalize_category_name(category_name)
        if not normalized:
            raise ValueError("Category name must not be empty")

        row = self._get(normalized)
        if row is not None and not force_regenerate:
            self.db.execute(
                update(CategoryTaxonomy)
                .where(CategoryTaxonomy.id == row.id)
                .values(usage_count=CategoryTaxonomy.usage_count + 1)
            )
            self.db.commit()
            self.db.refresh(row)
            logger.debug("Taxonomy cache hit for '%s'", normalized)
            return self._resolved(row, cached=True)

        logger.debug("Taxonomy cache miss for '%s'", normalized)
        payload = await self._generate(category_name)
        data = payload.model_dump(mode="json")

        if row is not None:
            row.category_name = category_name
            row.taxonomy_data = data
            self.db.commit()
            self.db.refresh(row)
            return self._resolved(row, cached=False)

        row = CategoryTaxonomy(
            category_name=category_name,
            normalized_name=normalized,
            taxonomy_data=data,
            usage_count=1,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "IntegrityError saving taxonomy '%s', using committed row: %s", normalized, e
            )
            winner = self._get(normalized)
            if winner is None:
                raise
            return self._resolved(winner, cached=True)

        self.db.refresh(row)
        logger.info("Cached new taxonomy for '%s'", normalized)
        return self._resolved(row, cached=False)

    def _get(self, normalized: str) -> Optional[CategoryTaxonomy]:
        return (
            self.db.query(CategoryTaxonomy)
            .filter(CategoryTaxonomy.normalized_name == normalized)
            .first()
        )

    async def _generate(self, category_name: str) -> TaxonomyPayload:
        if self.generator is not None and self.generator.is_available():
            try:
                return await self.generator.generate(category_name)
            except AIExtractionError as e:
                logger.warning(
                    "AI taxonomy generation failed for '%s', using template: %s",
                    category_name,
                    e,
                )
        return template_taxonomy(category_name)

    @staticmethod
    def _resolved(row: CategoryTaxonomy, cached: bool) -> ResolvedTaxonomy:
        return ResolvedTaxonomy(
            category_name=row.category_name,
            normalized_name=row.normalized_name,
            taxonomy=TaxonomyPayload.model_validate(row.taxonomy_data),
            cached=cached,
            usage_count=row.usage_count,
        )
