from .defaults import default_value_for  # noqa: F401
from .parser import SchemaParser, parse_schema  # noqa: F401
