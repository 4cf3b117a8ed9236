"""
app/validators package marker.
"""

from app.validators.header_validator import CSVHeaderError, HeaderErrorDetail, HeaderValidator
from app.validators.item_row_validator import ItemRowValidator

__all__ = [
    "CSVHeaderError",
    "HeaderErrorDetail",
    "HeaderValidator",
    "ItemRowValidator",
]
