from solrdrv._client import AsyncClient
from solrdrv._collections import CollectionBuilder, CollectionsAPI
from solrdrv._version import VERSION
from solrdrv.collection import Collection
from solrdrv.fields import FieldBuilder
from solrdrv.models.field import FieldDescriptor, SolrFieldType

__version__ = VERSION


__all__ = [
    "AsyncClient",
    "Collection",
    "CollectionBuilder",
    "CollectionsAPI",
    "FieldBuilder",
    "FieldDescriptor",
    "SolrFieldType",
]
