import json

from store_crud.errors import StoreError


def merge_json_objects(existing: bytes, partial: bytes) -> bytes:
    """Shallow-merge the JSON object ``partial`` into ``existing``.

    Args:
        existing: Stored record bytes
        partial: Partial record bytes

    Returns:
        The merged record serialized as JSON

    Raises:
        StoreError: If either side is not a JSON object
    """
    try:
        old = json.loads(existing)
        new = json.loads(partial)
    except ValueError as e:
        raise StoreError(f"Cannot merge non-JSON data: {e}") from e

    if not isinstance(old, dict) or not isinstance(new, dict):
        raise StoreError("Only JSON objects can be merged")

    old.update(new)
    return json.dumps(old).encode()
