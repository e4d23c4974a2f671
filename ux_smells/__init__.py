"""UX smell detection for design documents.

This package runs usability rules over the elements of a design document
and reports evidence-backed issues.

Main components:
- models: Element, Issue, Evidence and the tagged evidence values
- rules: Rule contract, validator, registry and the built-in rules
- document: Flattening exported design documents into elements
- config: Project settings loading and validation
- service: SmellsService, the surface a UI or CLI talks to
"""

from .config import SmellsConfig, SmellsConfigLoader, load_config
from .document import DocumentFormatError, load_elements, load_elements_file
from .models import (
    Element,
    Evidence,
    EvidenceKind,
    Issue,
    IssueCategory,
    SeverityLevel,
)
from .rules import (
    BatchAnalysisResult,
    Rule,
    RuleContext,
    RuleRegistry,
    create_rule_registry,
)
from .service import SmellsService

__version__ = "1.0.0"

__all__ = [
    # Models
    "Element",
    "Evidence",
    "EvidenceKind",
    "Issue",
    "IssueCategory",
    "SeverityLevel",
    # Rules
    "BatchAnalysisResult",
    "Rule",
    "RuleContext",
    "RuleRegistry",
    "create_rule_registry",
    # Loading and settings
    "DocumentFormatError",
    "SmellsConfig",
    "SmellsConfigLoader",
    "load_config",
    "load_elements",
    "load_elements_file",
    # Service
    "SmellsService",
]
