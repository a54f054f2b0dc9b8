"""Field definition tooling for javastream."""

from .parser import ValidationError as ValidationError
from .parser import parse as parse
from .parser import parse_definitions as parse_definitions
from .types import FieldDefinition as FieldDefinition
