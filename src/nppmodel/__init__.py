"""nppmodel: Net Primary Productivity from a light-use-efficiency model.

Example:
    >>> import numpy as np
    >>> import nppmodel
    >>>
    >>> ndvi = np.full((100, 100), 0.5)
    >>> lst = np.full((100, 100), 20.0)
    >>> sol = np.full((100, 100), 20.0)
    >>> we = np.ones((100, 100))
    >>> result = nppmodel.compute_single(ndvi, lst, sol, we, topt=21.66, luemax=0.72)
    >>> if isinstance(result, nppmodel.Diagnostic):
    ...     print(result)
    >>>
    >>> # Time series: position i of every sequence is one observation period
    >>> series = nppmodel.compute_batch([ndvi] * 4, [lst] * 4, [sol] * 4, [we] * 4,
    ...                                 topt=21.66, luemax=0.72)
"""

from nppmodel.__about__ import __version__
from nppmodel._types import Diagnostic, ValidationMode, ValidationResult
from nppmodel.analysis.npp import compute_npp, compute_npp_components
from nppmodel.config import Config, configure, get_default_config, load_config
from nppmodel.exceptions import ConfigurationError, NPPModelError
from nppmodel.model import compute_batch, compute_single
from nppmodel.results import NPPResult, NPPSeriesResult, ResultMetadata
from nppmodel.validation import validate_inputs

__all__ = [
    # Version
    "__version__",
    # Entry points
    "compute_batch",
    "compute_single",
    # Model formulas
    "compute_npp",
    "compute_npp_components",
    # Validation
    "Diagnostic",
    "ValidationMode",
    "ValidationResult",
    "validate_inputs",
    # Configuration
    "Config",
    "configure",
    "get_default_config",
    "load_config",
    # Results
    "NPPResult",
    "NPPSeriesResult",
    "ResultMetadata",
    # Exceptions
    "ConfigurationError",
    "NPPModelError",
]
