from contextdoc.compiler.render_xml import render_document

__all__ = ["render_document"]
