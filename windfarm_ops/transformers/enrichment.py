"""
Relational joins between the three datasets.

Both joins return new entity lists; inputs are never modified.
"""
from typing import List
import logging

from windfarm_ops.schemas.entities import Action, Case, SiteLocation

logger = logging.getLogger(__name__)


def join_site_locations(cases: List[Case], sites: List[SiteLocation]) -> List[Case]:
    """
    Attach site coordinates to cases by site_id.

    Cases with no matching site keep no_geo=True and empty coordinates.
    When a site id appears more than once, the last row wins.

    Args:
        cases: Cases fresh from the transformer
        sites: Site locations

    Returns:
        Cases with geolocation filled in where available
    """
    site_map = {site.site_id: site for site in sites}

    joined = []
    for case in cases:
        site = site_map.get(case.site_id)
        if site is None:
            joined.append(case)
            continue
        joined.append(case.model_copy(update={
            'latitude': site.latitude,
            'longitude': site.longitude,
            'no_geo': False,
        }))

    matched = sum(1 for c in joined if not c.no_geo)
    logger.info(f'Joined site locations: {matched}/{len(cases)} cases geolocated')
    return joined


def enrich_actions(actions: List[Action], cases: List[Case]) -> List[Action]:
    """
    Copy site name, turbine name and severity from each action's case.

    Orphaned actions (no matching case) are returned unchanged.

    Args:
        actions: Actions fresh from the transformer
        cases: Cases to look up by id

    Returns:
        Enriched actions, same order as the input
    """
    case_map = {case.id: case for case in cases}

    enriched = []
    for action in actions:
        case = case_map.get(action.case_id)
        if case is None:
            enriched.append(action)
            continue
        enriched.append(action.model_copy(update={
            'site_name': case.site_name,
            'turbine_name': case.turbine_name,
            'severity': case.severity,
        }))
    return enriched
