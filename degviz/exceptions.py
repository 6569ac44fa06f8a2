"""
Exception hierarchy for degviz
"""


class DegvizError(Exception):
    """Base class for all degviz errors"""


class SchemaError(DegvizError, ValueError):
    """A required column is absent from an input table"""

    def __init__(self, missing, table_name: str = "input table"):
        self.missing = list(missing)
        self.table_name = table_name
        super().__init__(
            f"{table_name} is missing required column(s): {', '.join(self.missing)}"
        )


class EmptyInputError(DegvizError, ValueError):
    """No usable rows remain after filtering"""


class ConfigError(DegvizError, ValueError):
    """Invalid plotting or configuration parameters"""
