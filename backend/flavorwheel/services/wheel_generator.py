"""Flavor wheel aggregation and caching."""

import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from flavorwheel.models.descriptor import Descriptor, DescriptorType
from flavorwheel.models.flavor_wheel import FlavorWheel, ScopeType, WheelType
from flavorwheel.schemas.wheel import CategoryNode, DescriptorNode, ScopeFilter, WheelData
from flavorwheel.services.categories import UNCATEGORIZED, color_for
from flavorwheel.services.exceptions import WheelScopeError
from flavorwheel.services.upsert import upsert_rows

logger = logging.getLogger(__name__)

EMPTY_WHEEL_WARNING = (
    "No flavor descriptors found for the specified scope. "
    "Try adding some tasting notes or reviews first."
)

WHEEL_DESCRIPTOR_TYPES = {
    WheelType.AROMA: (DescriptorType.AROMA,),
    WheelType.FLAVOR: (DescriptorType.FLAVOR,),
    WheelType.COMBINED: (
        DescriptorType.AROMA,
        DescriptorType.FLAVOR,
        DescriptorType.TEXTURE,
        DescriptorType.OTHER,
    ),
    WheelType.METAPHOR: (DescriptorType.METAPHOR,),
}

# (required fields, optional fields) of the scope filter per scope type
SCOPE_FIELDS = {
    ScopeType.PERSONAL: (("user_id",), ()),
    ScopeType.ITEM: (("item_name",), ("item_category",)),
    ScopeType.CATEGORY: (("item_category",), ()),
    ScopeType.TASTING: (("tasting_id",), ()),
    ScopeType.UNIVERSAL: ((), ()),
}

# Descriptor column each scope filter field matches
FILTER_COLUMNS = {
    "user_id": Descriptor.user_id,
    "item_name": Descriptor.item_name,
    "item_category": Descriptor.item_category,
    "tasting_id": Descriptor.source_id,
}


def resolve_scope(scope_type: ScopeType, scope_filter: ScopeFilter) -> dict[str, str]:
    """Filter fields that apply to ``scope_type``.

    Fields the scope type does not use are dropped, so they never split
    the cache.

    Raises:
        WheelScopeError: If a required field is missing
    """
    required, optional = SCOPE_FIELDS[scope_type]
    values = scope_filter.model_dump()
    resolved = {}
    for name in required:
        value = values.get(name)
        if value is None or not str(value).strip():
            raise WheelScopeError(f"Scope '{scope_type.value}' requires scope_filter.{name}")
        resolved[name] = value
    for name in optional:
        value = values.get(name)
        if value is not None and str(value).strip():
            resolved[name] = value
    return resolved


def scope_key(scope: dict[str, str]) -> str:
    """Canonical cache key for a resolved scope."""
    return json.dumps(scope, sort_keys=True, separators=(",", ":"))


@dataclass
class WheelResult:
    wheel_data: WheelData
    wheel_id: int
    cached: bool
    warning: Optional[str] = None


class WheelGenerator:
    """Get-or-generate for cached flavor wheels."""

    def __init__(self, db: Session):
        self.db = db

    def generate(
        self,
        wheel_type: WheelType,
        scope_type: ScopeType,
        scope_filter: Optional[ScopeFilter] = None,
        force_regenerate: bool = False,
    ) -> WheelResult:
        """Return the cached wheel for a key, or aggregate and cache it.

        Args:
            wheel_type: Which descriptor types the wheel covers
            scope_type: Filter dimension
            scope_filter: Filter values; requirements depend on ``scope_type``
            force_regenerate: Drop any cached wheel for the key first

        Returns:
            WheelResult; ``warning`` is set when the wheel has no categories

        Raises:
            WheelScopeError: If the filter lacks a required field
        """
        scope = resolve_scope(scope_type, scope_filter or ScopeFilter())
        key = scope_key(scope)

        if force_regenerate:
            deleted = self._cached_query(wheel_type, scope_type, key).delete(
                synchronize_session=False
            )
            self.db.commit()
            logger.info(
                "Invalidated %s cached %s/%s wheel(s)", deleted, wheel_type.value, scope_type.value
            )

        row = self._cached_query(wheel_type, scope_type, key).first()
        if row is not None:
            logger.debug("Wheel cache hit for %s/%s %s", wheel_type.value, scope_type.value, key)
            return self._result(row, cached=True)

        logger.debug("Wheel cache miss for %s/%s %s", wheel_type.value, scope_type.value, key)
        wheel_data = self.aggregate(wheel_type, scope_type, scope)
        row = self._store(wheel_type, scope_type, key, scope, wheel_data)
        return self._result(row, cached=False)

    def aggregate(
        self,
        wheel_type: WheelType,
        scope_type: ScopeType,
        scope: dict[str, str],
    ) -> WheelData:
        """Group matching descriptor rows into category and descriptor nodes.

        Node values are plain mention counts: the number of descriptor rows
        contributing to the node.
        """
        query = self.db.query(Descriptor).filter(
            Descriptor.descriptor_type.in_(WHEEL_DESCRIPTOR_TYPES[wheel_type])
        )
        for name, value in scope.items():
            query = query.filter(FILTER_COLUMNS[name] == value)
        rows = query.order_by(Descriptor.id).all()

        groups: dict[str, dict[tuple, list[Descriptor]]] = defaultdict(lambda: defaultdict(list))
        for row in rows:
            category = (row.category or "").strip() or UNCATEGORIZED
            groups[category][(row.normalized_form, row.descriptor_type)].append(row)

        total = len(rows)
        categories = []
        for name, descriptors in groups.items():
            count = sum(len(members) for members in descriptors.values())
            nodes = [self._descriptor_node(members) for members in descriptors.values()]
            nodes.sort(key=lambda node: (-node.count, node.text))
            categories.append(
                CategoryNode(
                    name=name,
                    count=count,
                    percentage=round(count * 100.0 / total, 1) if total else 0.0,
                    color=color_for(name),
                    descriptors=nodes,
                )
            )
        categories.sort(key=lambda node: (-node.count, node.name))

        return WheelData(
            wheel_type=wheel_type,
            scope_type=scope_type,
            scope_filter=ScopeFilter(**scope),
            categories=categories,
            total_descriptors=total,
            unique_descriptors=sum(len(node.descriptors) for node in categories),
            generated_at=datetime.utcnow(),
        )

    @staticmethod
    def _descriptor_node(members: list[Descriptor]) -> DescriptorNode:
        first = members[0]
        intensities = [m.intensity for m in members if m.intensity is not None]
        subcategory = next((m.subcategory for m in members if m.subcategory), None)
        return DescriptorNode(
            text=first.descriptor_text,
            count=len(members),
            type=first.descriptor_type,
            avg_intensity=round(sum(intensities) / len(intensities), 1) if intensities else None,
            subcategory=subcategory,
        )

    def _cached_query(self, wheel_type: WheelType, scope_type: ScopeType, key: str):
        return self.db.query(FlavorWheel).filter(
            FlavorWheel.wheel_type == wheel_type,
            FlavorWheel.scope_type == scope_type,
            FlavorWheel.scope_key == key,
        )

    def _store(
        self,
        wheel_type: WheelType,
        scope_type: ScopeType,
        key: str,
        scope: dict[str, str],
        wheel_data: WheelData,
    ) -> FlavorWheel:
        """Upsert the wheel; a concurrent writer for the same key is overwritten."""
        upsert_rows(
            self.db,
            FlavorWheel,
            [{
                "wheel_type": wheel_type,
                "scope_type": scope_type,
                "scope_key": key,
                "scope_filter": scope,
                "user_id": scope.get("user_id"),
                "wheel_data": wheel_data.model_dump(mode="json"),
                "descriptor_count": wheel_data.total_descriptors,
                "generated_at": wheel_data.generated_at,
            }],
            conflict_columns=("wheel_type", "scope_type", "scope_key"),
            update_columns=("scope_filter", "user_id", "wheel_data", "descriptor_count", "generated_at"),
        )
        self.db.commit()
        row = self._cached_query(wheel_type, scope_type, key).one()
        logger.info(
            "Generated %s/%s wheel %s with %s descriptors",
            wheel_type.value,
            scope_type.value,
            row.id,
            wheel_data.total_descriptors,
        )
        return row

    @staticmethod
    def _result(row: FlavorWheel, cached: bool) -> WheelResult:
        wheel_data = WheelData.model_validate(row.wheel_data)
        return WheelResult(
            wheel_data=wheel_data,
            wheel_id=row.id,
            cached=cached,
            warning=None if wheel_data.categories else EMPTY_WHEEL_WARNING,
        )
