"""namedclosure - capture a call's name, owner type and deferred invocation.

    from namedclosure import expand_function, named_closure

    @expand_function
    def schedule(job):
        return named_closure(job.run(retries=3))

    closure = schedule(job)
    closure.label      # "Job.run"
    closure.invoke()   # runs job.run(retries=3)
"""

__version__ = "0.1.0"

from namedclosure.application.services import (
    expand_directory,
    expand_file,
    expand_function,
    expand_source,
)
from namedclosure.domain import ExpansionConfig, ExpansionResult, ExpansionSite, NamedClosure
from namedclosure.domain.exceptions import (
    NamedClosureError,
    NotExpandedError,
    UnsupportedExpressionError,
)
from namedclosure.domain.named_closure import owner_type_of
from namedclosure.infrastructure.adapters import install_import_hook, uninstall_import_hook
from namedclosure.presentation.api import capture_function, capture_method, named_closure

__all__ = [
    "ExpansionConfig",
    "ExpansionResult",
    "ExpansionSite",
    "NamedClosure",
    "NamedClosureError",
    "NotExpandedError",
    "UnsupportedExpressionError",
    "__version__",
    "capture_function",
    "capture_method",
    "expand_directory",
    "expand_file",
    "expand_function",
    "expand_source",
    "install_import_hook",
    "named_closure",
    "owner_type_of",
    "uninstall_import_hook",
]
