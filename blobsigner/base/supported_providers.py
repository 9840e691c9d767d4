from typing import Literal


existing_providers = Literal[
    "azureblob",
    "s3",
    "s3-presigned",
    "s3-v4",
]


existing_operations = Literal["get", "put", "delete"]
