from catalog.errors import *
import catalog.models
import catalog.client

Record = catalog.models.Record
PaginationInfo = catalog.models.PaginationInfo
Page = catalog.models.Page
CollectionClient = catalog.client.CollectionClient
