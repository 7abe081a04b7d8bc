"""
Load cycle: read the three CSV files, build entities, join and validate.

The three files are independent, so they are read and transformed
concurrently; the site join, validation and action enrichment wait for all
three. Any parse-fatal failure propagates as DataLoadError and no partial
dataset is returned.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from windfarm_ops.extractors.csv_extractor import CSVExtractor, CSVSource
from windfarm_ops.schemas.dataset import LoadedData
from windfarm_ops.schemas.entities import Action, Case, SiteLocation
from windfarm_ops.transformers import ActionTransformer, CaseTransformer, SiteTransformer
from windfarm_ops.transformers.base_transformer import BaseTransformer
from windfarm_ops.transformers.enrichment import enrich_actions, join_site_locations
from windfarm_ops.validation import validate_data

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]


def _transformer_for(dataset: str, now: datetime) -> BaseTransformer:
    if dataset == 'cases':
        return CaseTransformer(now)
    if dataset == 'actions':
        return ActionTransformer(now)
    if dataset == 'sites':
        return SiteTransformer()
    raise ValueError(f'Unknown dataset: {dataset}')


def transform_rows(dataset: str, rows: Rows, now: datetime) -> Tuple[list, List[str]]:
    """
    Build entities for one dataset from cleaned rows.

    Returns:
        (entities, data-quality warnings)
    """
    return _transformer_for(dataset, now).run(rows)


def extract_and_transform(dataset: str, source: CSVSource, now: datetime) -> Tuple[list, List[str]]:
    """
    Read one CSV file and build its entities.

    Raises:
        DataLoadError: If the file cannot be read as CSV

    Returns:
        (entities, header and data-quality warnings)
    """
    extractor = CSVExtractor(dataset, source)
    rows = extractor.extract()
    warnings = extractor.validate_extraction(rows)
    entities, transform_warnings = transform_rows(dataset, rows, now)
    return entities, warnings + transform_warnings


def assemble_dataset(
    cases: List[Case],
    actions: List[Action],
    sites: List[SiteLocation],
    now: datetime,
    warnings: Optional[List[str]] = None,
) -> LoadedData:
    """
    Join sites onto cases, validate, then enrich actions.

    Args:
        cases: Cases from the transformer
        actions: Actions from the transformer
        sites: Site locations
        now: Load time, recorded as loaded_at
        warnings: Earlier warnings (headers, data quality) to report first

    Returns:
        LoadedData for the cycle
    """
    cases_with_geo = join_site_locations(cases, sites)
    validation = validate_data(cases_with_geo, actions)
    enriched_actions = enrich_actions(actions, cases_with_geo)

    if warnings:
        validation = validation.model_copy(update={
            'warnings': list(warnings) + validation.warnings,
        })

    logger.info(
        f'Loaded {len(cases_with_geo)} cases, {len(enriched_actions)} actions, '
        f'{len(sites)} sites ({len(validation.warnings)} warnings, '
        f'{len(validation.errors)} errors)'
    )

    return LoadedData(
        cases=cases_with_geo,
        actions=enriched_actions,
        sites=sites,
        validation=validation,
        loaded_at=now,
    )


def build_dataset(
    case_rows: Rows,
    action_rows: Rows,
    site_rows: Rows,
    now: datetime,
) -> LoadedData:
    """
    Synchronous load cycle over rows already in memory.

    Rows must be header-normalized and cleaned (as CSVExtractor returns them).
    """
    cases, case_warnings = transform_rows('cases', case_rows, now)
    actions, action_warnings = transform_rows('actions', action_rows, now)
    sites, site_warnings = transform_rows('sites', site_rows, now)
    return assemble_dataset(
        cases, actions, sites, now,
        warnings=case_warnings + action_warnings + site_warnings,
    )


async def load_dataset(
    cases_path: CSVSource,
    actions_path: CSVSource,
    sites_path: CSVSource,
    now: datetime,
) -> LoadedData:
    """
    Load the three CSV files concurrently and assemble the dataset.

    Args:
        cases_path: Cases CSV
        actions_path: Actions CSV
        sites_path: Site locations CSV
        now: Load time injected into every derived field

    Raises:
        DataLoadError: If any of the files cannot be read as CSV

    Returns:
        LoadedData
    """
    logger.info('Loading cases, actions and site locations...')
    (cases, case_warnings), (actions, action_warnings), (sites, site_warnings) = (
        await asyncio.gather(
            asyncio.to_thread(extract_and_transform, 'cases', cases_path, now),
            asyncio.to_thread(extract_and_transform, 'actions', actions_path, now),
            asyncio.to_thread(extract_and_transform, 'sites', sites_path, now),
        )
    )
    return assemble_dataset(
        cases, actions, sites, now,
        warnings=case_warnings + action_warnings + site_warnings,
    )


def load_dataset_sync(
    cases_path: CSVSource,
    actions_path: CSVSource,
    sites_path: CSVSource,
    now: datetime,
) -> LoadedData:
    """Blocking wrapper around load_dataset for callers without an event loop."""
    return asyncio.run(load_dataset(cases_path, actions_path, sites_path, now))
