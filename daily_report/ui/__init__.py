"""UI components module."""

from .styling import UIStyles
from .header import Header
