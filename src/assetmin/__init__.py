"""assetmin - CSS, JavaScript and markup minification."""

__version__ = "0.1.0"

from assetmin.errors import MinifyError  # noqa: E402
from assetmin.javascript import JavaScriptMinifier, minify_js  # noqa: E402
from assetmin.minifier import Output, ScriptMinifier, StylesheetMinifier  # noqa: E402
from assetmin.stylesheet import Compiler, minify_css  # noqa: E402

__all__ = [
    "Compiler",
    "JavaScriptMinifier",
    "MinifyError",
    "Output",
    "ScriptMinifier",
    "StylesheetMinifier",
    "__version__",
    "minify_css",
    "minify_js",
]
