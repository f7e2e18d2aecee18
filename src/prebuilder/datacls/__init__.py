"""
Prebuilder Data Classes

- options: BuildOption variant and addon build options
- models: Project, Addon and package discovery models
- records: summary entries, metadata records, store plans, clear results
"""

from .options import StaticOption, ComputedOption, BuildOption, AddonOptions, as_build_option
from .models import ProjectRole, Consumer, PackageInfo, PackageInfoCache, Project, Addon
from .records import UsageSummaryEntry, MetadataRecord, StorePlan, ClearResult

__all__ = [
    'StaticOption',
    'ComputedOption',
    'BuildOption',
    'AddonOptions',
    'as_build_option',
    'ProjectRole',
    'Consumer',
    'PackageInfo',
    'PackageInfoCache',
    'Project',
    'Addon',
    'UsageSummaryEntry',
    'MetadataRecord',
    'StorePlan',
    'ClearResult',
]
