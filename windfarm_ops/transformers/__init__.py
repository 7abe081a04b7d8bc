from .case_transformer import CaseTransformer, build_case
from .action_transformer import ActionTransformer, build_action
from .site_transformer import SiteTransformer, build_site

__all__ = [
    'CaseTransformer',
    'ActionTransformer',
    'SiteTransformer',
    'build_case',
    'build_action',
    'build_site',
]
