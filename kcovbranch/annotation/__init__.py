"""Annotated source output."""

from kcovbranch.annotation.emitter import AnnotationEmitter, RewriteBuffer, annotated_path

__all__ = ["AnnotationEmitter", "RewriteBuffer", "annotated_path"]
