from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def plain_decimal(value: Decimal) -> str:
    """Render without trailing zeros and never in scientific notation: 1.50 -> "1.5", 1E+2 -> "100"."""
    return format(value.normalize(), "f")


DecimalStr = Annotated[Decimal, PlainSerializer(plain_decimal, return_type=str)]


def usd_map(value: Optional[Decimal]) -> dict[str, Optional[Decimal]]:
    return {"USD": value}


class ApiModel(BaseModel):
    """JSON uses camelCase field names; Python code keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


ValueInOtherCurrency = dict[str, Optional[DecimalStr]]
