"""Sense identifiers, mapping tables and the stages that translate between inventories."""

from ..errors import PipelineConfigurationError, ResourceLoadError, SenseMappingError, UnknownSenseError
from .inventory import InventorySpec, SenseInventoryName, SenseLabel, get_inventory
from .items import Document, SenseAssignment, WSDItem, WSDTarget
from .mapping_table import MappingTable
from .mapper import SenseMapperConfig, SenseMapperStage
from .wordnet import load_index_sense, synset_mapper

__all__ = [
    "Document",
    "InventorySpec",
    "MappingTable",
    "PipelineConfigurationError",
    "ResourceLoadError",
    "SenseAssignment",
    "SenseInventoryName",
    "SenseLabel",
    "SenseMapperConfig",
    "SenseMapperStage",
    "SenseMappingError",
    "UnknownSenseError",
    "WSDItem",
    "WSDTarget",
    "get_inventory",
    "load_index_sense",
    "synset_mapper",
]
