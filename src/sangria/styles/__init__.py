"""Built-in styles.

Importing this package registers every built-in style in BUILTIN_STYLES.
"""

from sangria.style import register_style
from sangria.styles.columnar import COLUMNAR
from sangria.styles.fundamental import FUNDAMENTAL

for _style in (FUNDAMENTAL, COLUMNAR):
    register_style(_style, replace=True)

__all__ = ["COLUMNAR", "FUNDAMENTAL"]
