import logging
from typing import Dict, Iterable, List, Optional

from forceclass.core.metrics import records_classified_total, records_skipped_total, track_performance
from forceclass.schemas.summary import UnitSummary
from forceclass.services.equipment import EquipmentTaxonomy
from forceclass.services.exceptions import ClassificationError, RecordNotFoundError
from forceclass.services.quad_resolver import EntityLoader, QuadChassisResolver, QuadState
from forceclass.services.records import ChassisRecord, ModelRecord
from forceclass.services.repository import UnitRepository
from forceclass.services.scanner import EquipmentScanner

logger = logging.getLogger(__name__)


class ClassificationCatalog:
    """
    Classified model records grouped by chassis.

    Built in two phases: `add_summaries` classifies the unit catalog, then the
    faction-data loader calls `update_constraints` for declared roles,
    deployment affinities and exclusions. Quad classification is resolved on
    demand through the resolver.
    """

    def __init__(self, scanner: EquipmentScanner, resolver: Optional[QuadChassisResolver] = None):
        self.scanner = scanner
        self.resolver = resolver
        self._records: Dict[str, ModelRecord] = {}
        self._chassis: Dict[str, ChassisRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def add_summaries(self, summaries: Iterable[UnitSummary]) -> List[ModelRecord]:
        """Classify summaries; ones that cannot be classified are logged and skipped."""
        summaries = list(summaries)
        known_names = {summary.name for summary in summaries} | set(self._records)

        added = []
        for summary in summaries:
            try:
                record = ModelRecord.from_summary(summary, self.scanner, known_names.__contains__)
            except ClassificationError as e:
                records_skipped_total.labels(reason=e.__class__.__name__).inc()
                logger.warning(f"Skipping {summary.name}: {e}")
                continue
            self.add_record(record)
            added.append(record)
        return added

    def add_record(self, record: ModelRecord) -> None:
        if record.key in self._records:
            logger.warning(f"Duplicate unit key {record.key}; keeping the first record")
            records_skipped_total.labels(reason="duplicate").inc()
            return
        self._records[record.key] = record
        records_classified_total.labels(unit_type=record.unit_type.label).inc()

        chassis_record = self._chassis.get(record.chassis_key)
        if chassis_record is None:
            self._chassis[record.chassis_key] = record.create_chassis_record()
        else:
            chassis_record.add_model(record)

    def get_record(self, key: str) -> ModelRecord:
        record = self._records.get(key)
        if record is None:
            raise RecordNotFoundError(f"Unit {key} not found", key=key)
        return record

    def get_chassis(self, chassis_key: str) -> ChassisRecord:
        chassis_record = self._chassis.get(chassis_key)
        if chassis_record is None:
            raise RecordNotFoundError(f"Chassis {chassis_key} not found", key=chassis_key)
        return chassis_record

    def records(self) -> List[ModelRecord]:
        return list(self._records.values())

    def chassis_records(self) -> List[ChassisRecord]:
        return list(self._chassis.values())

    def update_constraints(
        self,
        key: str,
        roles: Optional[str] = None,
        deployed_with: Optional[str] = None,
        excluded_factions: Optional[str] = None,
        strict: bool = False,
    ) -> ModelRecord:
        """
        Apply faction-data encodings to one record.

        `roles` and `excluded_factions` replace what the record held;
        `deployed_with` is appended. Fields left as None are untouched.
        """
        record = self.get_record(key)
        if roles is not None:
            record.constraints.replace_roles(roles, strict=strict)
        if deployed_with is not None:
            record.constraints.append_deployment(deployed_with)
        if excluded_factions is not None:
            record.constraints.replace_excluded_factions(excluded_factions)
        return record

    def quad_state(self, key: str) -> QuadState:
        record = self.get_record(key)
        if self.resolver is None:
            return QuadState.UNKNOWN
        return self.resolver.state(record.chassis_key)

    async def is_quad(self, key: str) -> Optional[bool]:
        record = self.get_record(key)
        if self.resolver is None:
            return None
        return await self.resolver.resolve(record)


@track_performance(service_name="ClassificationCatalog")
async def build_catalog(
    repository: UnitRepository,
    taxonomy: EquipmentTaxonomy,
    loader: Optional[EntityLoader] = None,
    **resolver_options,
) -> ClassificationCatalog:
    """Classify every summary in the repository into a new catalog."""
    resolver = QuadChassisResolver(loader, **resolver_options) if loader is not None else None
    catalog = ClassificationCatalog(EquipmentScanner(taxonomy), resolver=resolver)

    summaries = await repository.list_summaries()
    catalog.add_summaries(summaries)
    logger.info(
        f"Classified {len(catalog)} of {len(summaries)} unit summaries",
        extra={'records': len(catalog), 'chassis': len(catalog.chassis_records())}
    )
    return catalog
