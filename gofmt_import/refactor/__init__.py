"""Import block regrouping: classifier, group sorter, layout synthesizer and the block driver."""

from .block_transformer import transform_block, transform_file
from .classifier import classify
from .layout import synthesize_layout
from .sorter import sort_group

__all__ = ["classify", "sort_group", "synthesize_layout", "transform_block", "transform_file"]
