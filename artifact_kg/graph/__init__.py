"""
Graph Assembly

Pure derivation of a renderable node/edge graph from the artifact tables.

Modules:
    assembler: GraphAssembler, assemble()
    layers: Augmentation layers (documents, text units, communities, covariates)
    builder: GraphBuilder scratch state used during one assembly
"""

from artifact_kg.graph.assembler import GraphAssembler, assemble
from artifact_kg.graph.builder import GraphBuilder
from artifact_kg.graph.layers import (
    DEFAULT_LAYERS,
    AugmentationLayer,
    CommunityLayer,
    CovariateLayer,
    DocumentLayer,
    TextUnitLayer,
)

__all__ = [
    "GraphAssembler",
    "assemble",
    "GraphBuilder",
    "DEFAULT_LAYERS",
    "AugmentationLayer",
    "DocumentLayer",
    "TextUnitLayer",
    "CommunityLayer",
    "CovariateLayer",
]
