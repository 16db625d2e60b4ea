"""HTTP handlers for CRUD operations over an object store bucket.

Handlers convert between requests and service calls. They handle HTTP
concerns like status codes, body decoding, callbacks and error responses.
"""

import logging
from typing import Any

from pydantic import BaseModel
from starlette.requests import Request
from starlette.responses import JSONResponse

from store_crud.decoding import decode
from store_crud.dto import ErrorListResponse, FailureResponse, MessageResponse, PageResponse
from store_crud.entities import ChangeResult, CreateResult, ErrorContext, StoreRow, SuccessContext
from store_crud.errors import JSONError, KeyNotFoundError, MalformedPayloadError, UnknownContentError
from store_crud.pagination import page_request_from_query
from store_crud.protocols import GetKey, MarshalFn, ObjectStore, OnError, OnSuccess, UnmarshalFn
from store_crud.services import CrudService
from store_crud.utils import callable_name, resolve, time_ordered_key, time_track

logger = logging.getLogger(__name__)

BIND_FAILED = "Seems like the data submitted is not formatted properly"
SAVE_FAILED = "An error occured and this item could not be saved"
NO_KEY = "Unable to derive a key for this item"


def _message(status_code: int, msg: str) -> JSONResponse:
    return JSONResponse(MessageResponse(msg=msg).model_dump(), status_code=status_code)


def _failure(message: str) -> JSONResponse:
    return JSONResponse(FailureResponse(message=message).model_dump(), status_code=500)


def _marshal_error(err: Exception) -> JSONResponse:
    if isinstance(err, JSONError):
        body = ErrorListResponse(msg="Malformed data", error=err.serialize())
        return JSONResponse(body.model_dump(), status_code=400)
    return _message(400, str(err))


def _default_key(record: dict[str, Any], request: Request) -> str:
    return time_ordered_key()


class CrudHandler:
    """HTTP handlers for one resource stored in one bucket.

    The handler delegates storage to CrudService and handles
    HTTP-specific concerns like:
    - Decoding request bodies by content type
    - Running the marshal/unmarshal/key callbacks
    - Setting status codes and calling on-success/on-error

    Every public method returns a response and never raises; unexpected
    exceptions are logged and answered with a 500.

    Example:
        ```python
        from store_crud.handlers import CrudHandler
        from store_crud.repositories import InMemoryObjectStore

        notes = CrudHandler(bucket="notes", store=InMemoryObjectStore())

        @app.get("/notes/{key}")
        async def get_note(request: Request, key: str):
            return await notes.get(request, key)
        ```
    """

    def __init__(
        self,
        bucket: str,
        store: ObjectStore,
        record_model: type[BaseModel] | None = None,
        marshal: MarshalFn | None = None,
        unmarshal: UnmarshalFn | None = None,
        get_key: GetKey | None = None,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
        default_page_size: int | None = None,
    ) -> None:
        """Initialize the CRUD handler.

        Args:
            bucket: Bucket the resource lives in (required).
            store: Backing object store (required).
            record_model: Pydantic model request bodies and stored records
                are validated against when no marshal/unmarshal is given.
            marshal: Converts a request into the record to persist.
            unmarshal: Converts a stored row into a response body.
            get_key: Derives the key of a new record. Defaults to a
                time-ordered unique key.
            on_success: Called after a successful operation.
            on_error: Called when an operation fails.
            default_page_size: Page size when ``_perPage`` is absent.
                Defaults to settings.
        """
        self._bucket = bucket
        self._service = CrudService.create(store=store, bucket=bucket, record_model=record_model)
        self._marshal = marshal
        self._unmarshal = unmarshal
        self._get_key = get_key or _default_key
        self._on_success = on_success
        self._on_error = on_error
        self._default_page_size = default_page_size

    async def _notify_error(
        self, err: Exception, request: Request, key: str | None = None
    ) -> None:
        if self._on_error is None:
            return
        logger.debug(
            "onError bucket=%s key=%s onError=%s", self._bucket, key, callable_name(self._on_error)
        )
        await resolve(self._on_error(ErrorContext(bucket=self._bucket, key=key, request=request), err))

    async def _notify_success(
        self,
        request: Request,
        key: str | None = None,
        result: Any = None,
        existing: dict[str, Any] | None = None,
    ) -> None:
        if self._on_success is None:
            return
        logger.debug(
            "onSuccess bucket=%s key=%s onSuccess=%s",
            self._bucket,
            key,
            callable_name(self._on_success),
        )
        ctx = SuccessContext(
            bucket=self._bucket, key=key, result=result, existing=existing, request=request
        )
        await resolve(self._on_success(ctx))

    async def _unmarshal_row(self, request: Request, row: StoreRow) -> dict[str, Any]:
        with time_track(f"Do Unmarshal {row.key} from {self._bucket}"):
            data = await resolve(self._unmarshal(request, row))
        data = dict(data or {})
        data["key"] = row.key
        return data

    async def _read_input(
        self, request: Request, partial: bool = False
    ) -> tuple[dict[str, Any] | None, dict[str, Any] | None, JSONResponse | None]:
        """Run the marshal callback, or decode and validate the body.

        Returns:
            Tuple of (record, existing, error_response); exactly one of
            record and error_response is set
        """
        if self._marshal is not None:
            logger.debug(
                "Marshal bucket=%s marshalfn=%s", self._bucket, callable_name(self._marshal)
            )
            try:
                result = await resolve(self._marshal(request))
            except Exception as e:
                logger.info("Marshal rejected request for %s: %s", self._bucket, e)
                await self._notify_error(e, request)
                return None, None, _marshal_error(e)

            if isinstance(result, ChangeResult):
                return dict(result.new), result.old, None
            if isinstance(result, CreateResult):
                return dict(result.new), None, None
            if isinstance(result, dict):
                return dict(result), None, None
            raise TypeError(f"marshal returned unsupported type {type(result).__name__}")

        try:
            payload = await decode(request)
            if partial:
                record = self._service.validate_partial(payload)
            else:
                record = self._service.validate(payload)
        except (UnknownContentError, MalformedPayloadError, ValueError) as e:
            logger.info("Bind failed for %s: %s", self._bucket, e)
            await self._notify_error(e, request)
            return None, None, _message(400, BIND_FAILED)
        return record, None, None

    async def _persist(
        self,
        request: Request,
        key: str,
        record: dict[str, Any],
        existing: dict[str, Any] | None = None,
    ) -> JSONResponse:
        try:
            self._service.save(key, record)
        except Exception as e:
            logger.warning("Save failed bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(500, SAVE_FAILED)

        body = dict(record)
        body["key"] = key
        await self._notify_success(request, key, body, existing)
        return JSONResponse(body, status_code=200)

    async def get(self, request: Request, key: str) -> JSONResponse:
        """Handle GET /<resource>/{key} requests.

        Args:
            request: The incoming request
            key: The record key

        Returns:
            200 with the record, 404 if the store cannot read it
        """
        try:
            return await self._get(request, key)
        except Exception:
            logger.exception("Unhandled error in GET bucket=%s key=%s", self._bucket, key)
            return _failure("Unable to read item")

    async def _get(self, request: Request, key: str) -> JSONResponse:
        try:
            row = self._service.fetch(key)
        except Exception as e:
            logger.debug("Get failed bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(404, f"{key} Not found")

        try:
            if self._unmarshal is not None:
                body = await self._unmarshal_row(request, row)
            else:
                body = self._service.to_record(row)
        except Exception as e:
            logger.warning("Unmarshal failed bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(500, str(e))

        await self._notify_success(request, row.key, body)
        return JSONResponse(body, status_code=200)

    async def get_all(self, request: Request) -> JSONResponse:
        """Handle GET /<resource> requests.

        Query parameters:
            _perPage: Page size
            afterKey: Return records after this key
            beforeKey: Return records before this key

        Returns:
            200 with a page envelope and an X-Total-Count header, or 200
            with an empty list when nothing matched
        """
        try:
            return await self._get_all(request)
        except Exception:
            logger.exception("Unhandled error in GET ALL bucket=%s", self._bucket)
            return _failure("Unable to list items")

    async def _get_all(self, request: Request) -> JSONResponse:
        page_request = page_request_from_query(request.query_params, self._default_page_size)

        try:
            page = self._service.fetch_page(page_request)
        except Exception as e:
            logger.warning("Listing failed bucket=%s: %s", self._bucket, e)
            await self._notify_error(e, request)
            return JSONResponse([], status_code=200)

        results: list[dict[str, Any]] = []
        for row in page.rows:
            if self._unmarshal is not None:
                try:
                    results.append(await self._unmarshal_row(request, row))
                except Exception as e:
                    logger.debug("Skipping row bucket=%s key=%s: %s", self._bucket, row.key, e)
                continue

            try:
                results.append(self._service.to_record(row))
            except ValueError as e:
                logger.warning("Corrupt row bucket=%s key=%s: %s", self._bucket, row.key, e)
                await self._notify_error(e, request, row.key)
                return _message(500, str(e))

        if not results:
            return JSONResponse([], status_code=200)

        try:
            total_count = self._service.total_count()
        except Exception as e:
            logger.warning("Stats failed bucket=%s: %s", self._bucket, e)
            total_count = 0

        envelope = PageResponse(
            data=results,
            count=len(results),
            total_count=total_count,
            has_more=page.has_more,
        ).to_body()
        await self._notify_success(request, result=envelope)
        return JSONResponse(
            envelope,
            status_code=200,
            headers={"X-Total-Count": str(total_count)},
        )

    async def post(self, request: Request) -> JSONResponse:
        """Handle POST /<resource> requests.

        Returns:
            200 with the stored record and its key, 400 if the input is
            rejected, 500 if no key can be derived or the store fails
        """
        try:
            return await self._post(request)
        except Exception:
            logger.exception("Unhandled error in POST bucket=%s", self._bucket)
            return _failure("Unable to create item")

    async def _post(self, request: Request) -> JSONResponse:
        record, existing, error = await self._read_input(request)
        if error is not None:
            return error

        logger.debug("Derive key bucket=%s getkey=%s", self._bucket, callable_name(self._get_key))
        key = await resolve(self._get_key(record, request))
        if not key:
            return _message(500, NO_KEY)

        return await self._persist(request, key, record, existing)

    async def put(self, request: Request, key: str) -> JSONResponse:
        """Handle PUT /<resource>/{key} requests (full replacement).

        Returns:
            200 with the stored record, 400 if the input is rejected,
            500 if the store fails
        """
        try:
            record, existing, error = await self._read_input(request)
            if error is not None:
                return error
            return await self._persist(request, key, record, existing)
        except Exception:
            logger.exception("Unhandled error in PUT bucket=%s key=%s", self._bucket, key)
            return _failure("Unable to edit item")

    async def patch(self, request: Request, key: str) -> JSONResponse:
        """Handle PATCH /<resource>/{key} requests (merge into stored record).

        Returns:
            200 with the merged record, 400 if the input is rejected,
            404 if the key does not exist, 500 if the store fails
        """
        try:
            return await self._patch(request, key)
        except Exception:
            logger.exception("Unhandled error in PATCH bucket=%s key=%s", self._bucket, key)
            return _failure("Unable to edit item")

    async def _patch(self, request: Request, key: str) -> JSONResponse:
        partial, existing, error = await self._read_input(request, partial=True)
        if error is not None:
            return error

        try:
            record = self._service.merged(key, partial)
        except KeyNotFoundError as e:
            await self._notify_error(e, request, key)
            return _message(404, f"{key} Not found")
        except ValueError as e:
            logger.info("Merged record rejected bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(400, BIND_FAILED)
        except Exception as e:
            logger.warning("Merge failed bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(500, SAVE_FAILED)

        return await self._persist(request, key, record, existing)

    async def delete(self, request: Request, key: str) -> JSONResponse:
        """Handle DELETE /<resource>/{key} requests.

        Returns:
            200 when deleted, 500 when the store could not delete it
        """
        try:
            return await self._delete(request, key)
        except Exception:
            logger.exception("Unhandled error in DELETE bucket=%s key=%s", self._bucket, key)
            return _failure("Unable to delete item")

    async def _delete(self, request: Request, key: str) -> JSONResponse:
        try:
            self._service.remove(key)
        except Exception as e:
            logger.warning("Delete failed bucket=%s key=%s: %s", self._bucket, key, e)
            await self._notify_error(e, request, key)
            return _message(500, f"The item [{key}] was not deleted")

        await self._notify_success(request, key)
        return _message(200, f"The item [{key}] was deleted")

    @property
    def bucket(self) -> str:
        """Get the bucket name."""
        return self._bucket

    @property
    def service(self) -> CrudService:
        """Get the underlying service (for testing)."""
        return self._service
