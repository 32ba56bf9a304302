from datetime import datetime
from typing import Dict, List, Optional, Union

from mealflow.schemas.common import RWSchema


class GroceryItem(RWSchema):
    name: str
    category: str
    unit: str
    quantity: float


class GroceryListResponse(RWSchema):
    """
    Shopping list for the current week.

    With entries in the plan ``grocery_list`` maps category -> items and the
    totals/week bounds are set; otherwise it is an empty list and ``message``
    explains why.
    """
    grocery_list: Union[Dict[str, List[GroceryItem]], List[GroceryItem]]
    total_items: Optional[int] = None
    week_start: Optional[datetime] = None
    week_end: Optional[datetime] = None
    message: Optional[str] = None
