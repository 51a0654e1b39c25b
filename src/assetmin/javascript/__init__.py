from assetmin.javascript.scanner import KEYWORDS, JavaScriptMinifier, minify_js

__all__ = ["KEYWORDS", "JavaScriptMinifier", "minify_js"]
