"""springgen -- Spring Initializr integration.

Metadata models, the async HTTP client, and the pure option builders used
by the interactive form.
"""

from .client import DEFAULT_BASE_URL, METADATA_ACCEPT, InitializrClient, InitializrError
from .models import (
    Dependency,
    DependencyCatalogue,
    DependencyGroup,
    Metadata,
    Option,
    ProjectRequest,
    SingleSelect,
    TextField,
    derive_package_name,
)
from .options import (
    Choice,
    compute_offered_options,
    default_choice,
    dependency_choices,
    project_type_choices,
    select_choices,
)

__all__ = [
    # Client
    "DEFAULT_BASE_URL",
    "METADATA_ACCEPT",
    "InitializrClient",
    "InitializrError",
    # Models
    "Dependency",
    "DependencyCatalogue",
    "DependencyGroup",
    "Metadata",
    "Option",
    "ProjectRequest",
    "SingleSelect",
    "TextField",
    "derive_package_name",
    # Options
    "Choice",
    "compute_offered_options",
    "default_choice",
    "dependency_choices",
    "project_type_choices",
    "select_choices",
]
