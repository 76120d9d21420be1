"""
Item API endpoints.

This router handles item management:
- Listing, reading, creating, updating and deleting items
- Batch processing every item to PROCESSED

Request bodies are validated by ``ItemRequest``; invalid bodies are answered
with 400 by ``validation_exception_handler`` before the store is touched.
Batch failures are raised as ``ProcessingError`` and turned into 500 by
``processing_exception_handler``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_item_processor, get_item_store
from api.schemas import ItemRequest, ItemResponse, MessageResponse
from utils.item_utils import ItemStore
from utils.processing import ItemProcessor
from utils.validation import validate_integer_id

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=List[ItemResponse])
async def get_all_items_endpoint(store: ItemStore = Depends(get_item_store)) -> List[ItemResponse]:
    """Get all items"""
    items = await store.find_all()
    return [ItemResponse.model_validate(item) for item in items]


# Declared before "/{item_id}" so "process" is not parsed as an id
@router.get(
    "/process",
    response_model=List[ItemResponse],
    responses={500: {"model": MessageResponse}},
)
async def process_items_endpoint(
    processor: ItemProcessor = Depends(get_item_processor)
) -> List[ItemResponse]:
    """
    Process all items and return the ones that reached PROCESSED.

    Every item id is processed concurrently on the shared worker pool. Items
    that disappear or fail are left out of the response. If the batch does
    not finish within the deadline the whole request fails with 500, even
    though items processed so far stay saved.
    """
    items = await processor.process_all()
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item_endpoint(item_id: int, store: ItemStore = Depends(get_item_store)) -> ItemResponse:
    """Get a single item"""
    item_id = validate_integer_id(item_id)

    item = await store.find_by_id(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return ItemResponse.model_validate(item)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item_endpoint(
    item_request: ItemRequest, store: ItemStore = Depends(get_item_store)
) -> ItemResponse:
    """Create a new item. The store assigns its id."""
    saved = await store.save(item_request.to_item())
    return ItemResponse.model_validate(saved)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item_endpoint(
    item_id: int, item_request: ItemRequest, store: ItemStore = Depends(get_item_store)
) -> ItemResponse:
    """
    Replace an existing item.

    The id from the path always wins over anything in the body.
    """
    item_id = validate_integer_id(item_id)

    existing = await store.find_by_id(item_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Item not found")

    saved = await store.save(item_request.to_item(item_id=item_id))
    return ItemResponse.model_validate(saved)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item_endpoint(item_id: int, store: ItemStore = Depends(get_item_store)) -> Response:
    """Delete an item. Returns 404 if it does not exist."""
    item_id = validate_integer_id(item_id)

    # Check existence first; the store's delete is silent for missing ids
    existing = await store.find_by_id(item_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Item not found")

    await store.delete_by_id(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
