"""folio: in-memory query engine for flat-file content records.

Turns a loaded collection of page/entry records into the filtered,
sorted, paginated and supplemented sequence a template layer renders.
"""

from folio.config import FolioConfig, load_config
from folio.query.contentset import ContentSet
from folio.query.filters import FilterSpec
from folio.query.supplement import SupplementContext

__version__ = "0.1.0"

__all__ = [
    "ContentSet",
    "FilterSpec",
    "FolioConfig",
    "SupplementContext",
    "__version__",
    "load_config",
]
