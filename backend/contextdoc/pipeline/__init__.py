from contextdoc.pipeline.context import AssemblyContext
from contextdoc.pipeline.controller import DocumentAssembler, assemble_document
from contextdoc.pipeline.stage import PipelineStage

__all__ = [
    "AssemblyContext",
    "DocumentAssembler",
    "PipelineStage",
    "assemble_document",
]
