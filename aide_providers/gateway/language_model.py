"""AIDE gateway language model adapter.

Purpose:
- Expose ``generate`` and ``stream`` for one logical model on top of the
  synchronous AIDE ``/generate`` endpoint.

Flow:
    options -> sampling defaults -> request envelope (+ warnings)
    -> bearer token -> POST ``{base_url}/generate`` -> envelope parse
    -> ``UnifiedResult`` (generate) or simulated events (stream)

Error policy:
- ``generate`` raises ``ProviderError``/``CancelledError``. The adapter never
  retries; ``ProviderError.retryable`` is a hint for the caller.
- ``stream`` never raises for failures that happen before a result exists:
  they are reported as ``stream-start`` followed by one ``error`` event.

Cancellation:
- The caller's ``CancellationToken`` is checked before the token fetch, before
  the POST, while waiting for the response headers, and between body chunks.
- With a token present the send runs on a shared worker pool so a cancel
  during the wait for headers returns immediately; the abandoned response is
  closed when it arrives. Once headers are in, cancelling closes the response,
  which unblocks a pending read.
"""

from __future__ import annotations

import concurrent.futures as cf
import json
import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ErrorCode, ProviderError, RETRYABLE_CODES, code_for_status, wrap_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CallOptions, CallWarning, ModelInfo, ModelSettings, UnifiedResult
from ..base.streaming import StreamEvent, error_stream, simulate_stream
from ..config.defaults import GATEWAY_GENERATE_PATH
from ..config.settings import PolicyOptions
from .envelope import ConvertedRequest, convert_request
from .wire import parse_error_body, parse_response

# Callable returning a bearer token; receives the call's cancellation token.
TokenSupplier = Callable[[Optional[CancellationToken]], str]

# Cancellation is re-checked at this interval while the gateway is computing.
_SEND_POLL_SECONDS = 0.05

_executor: Optional[cf.ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _send_executor() -> cf.ThreadPoolExecutor:
    """Lazily create the shared pool that runs cancellable sends."""
    global _executor  # noqa: PLW0603 - module-level pool
    with _executor_lock:
        if _executor is None:
            _executor = cf.ThreadPoolExecutor(thread_name_prefix="aide-send")
        return _executor


def _close_abandoned(future: "cf.Future[httpx.Response]") -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


@dataclass(frozen=True)
class GatewayConfig:
    """Resolved, validated gateway coordinates shared by a provider's models."""

    base_url: str
    use_case_id: str
    solma_id: str
    get_token: TokenSupplier
    headers: Mapping[str, str] = field(default_factory=dict)
    policy: PolicyOptions = field(default_factory=PolicyOptions)

    @property
    def generate_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{GATEWAY_GENERATE_PATH}"


@dataclass
class StreamResponse:
    """Result of ``stream``: the event iterator plus the request that was sent.

    Iterating a ``StreamResponse`` iterates its events. ``request_body`` is
    ``None`` when the failure happened before the request was built.
    """

    events: Iterator[StreamEvent]
    request_body: Optional[Dict[str, Any]] = None

    def __iter__(self) -> Iterator[StreamEvent]:
        return self.events


class AideLanguageModel:
    """Language model bound to one registry entry and one gateway config."""

    provider = "aide"

    def __init__(
        self,
        model_id: str,
        model_info: ModelInfo,
        config: GatewayConfig,
        settings: Optional[ModelSettings] = None,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.model_id = model_id
        self.model_info = model_info
        self.config = config
        self.settings = settings or ModelSettings()
        self._client = client
        self._logger = get_logger("aide.gateway")

    @property
    def supported_urls(self) -> Dict[str, List[str]]:
        """URL patterns the gateway can fetch directly (none)."""
        return {}

    def _ctx(self) -> LogContext:
        return LogContext(provider=self.provider, model=self.model_id)

    def _http(self) -> httpx.Client:
        return self._client or get_httpx_client(None, "gateway")

    # ---- request building ----

    def build_request(self, options: CallOptions) -> ConvertedRequest:
        """Convert ``options`` into the gateway request body and warnings."""
        sampling = options.sampling(self.settings, self.model_info.max_tokens)
        converted = convert_request(
            options.prompt,
            self.model_info,
            sampling,
            solma_id=self.config.solma_id,
            policy=self.config.policy,
            tools=options.tools,
            tool_choice=options.tool_choice,
        )
        for warning in converted.warnings:
            self._log_warning(warning)
        return converted

    def _log_warning(self, warning: CallWarning) -> None:
        normalized_log_event(
            self._logger,
            "request.warning",
            self._ctx(),
            phase="prepare",
            level=logging.WARNING,
            warning_type=warning.type,
            setting=warning.setting,
        )

    def _headers(self, token: str, extra: Mapping[str, str]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "UseCaseID": self.config.use_case_id,
            "Authorization": f"Bearer {token}",
        }
        headers.update(self.config.headers)
        headers.update(extra)
        return headers

    # ---- transport ----

    def _error_from_response(self, response: httpx.Response, raw: bytes) -> ProviderError:
        text = raw.decode("utf-8", errors="replace")
        message = f"AIDE API error: {response.status_code} {response.reason_phrase}"
        try:
            payload = json.loads(text)
        except ValueError:
            if text:
                message += f" - {text}"
        else:
            body = parse_error_body(payload)
            if body is not None and body.error:
                detail = body.error if isinstance(body.error, str) else json.dumps(body.error)
                message = f"AIDE API error: {detail}"
        code = code_for_status(response.status_code)
        return ProviderError(
            code=code,
            message=message,
            model=self.model_id,
            retryable=code in RETRYABLE_CODES,
            status_code=response.status_code,
        )

    def _read_body(self, response: httpx.Response, cancel: Optional[CancellationToken]) -> bytes:
        chunks: List[bytes] = []
        for chunk in response.iter_bytes():
            if cancel is not None:
                cancel.raise_if_cancelled()
            chunks.append(chunk)
        return b"".join(chunks)

    def _transport_error(self, exc: Exception, cancel: Optional[CancellationToken]) -> Exception:
        if cancel is not None and cancel.cancelled:
            return CancelledError(cancel.reason or "operation cancelled")
        return wrap_exception(exc, "AIDE API request failed", model=self.model_id)

    def _send(
        self,
        http: httpx.Client,
        request: httpx.Request,
        cancel: Optional[CancellationToken],
    ) -> httpx.Response:
        """Send ``request`` and return the response with its body still unread.

        With a cancellation token the send runs on the shared pool and the
        caller polls the token until headers arrive.
        """
        try:
            if cancel is None:
                return http.send(request, stream=True)
            future = _send_executor().submit(http.send, request, stream=True)
            while True:
                try:
                    return future.result(timeout=_SEND_POLL_SECONDS)
                except cf.TimeoutError:
                    if cancel.cancelled:
                        future.cancel()
                        future.add_done_callback(_close_abandoned)
                        raise CancelledError(cancel.reason or "operation cancelled") from None
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise self._transport_error(exc, cancel) from exc

    def _post(
        self,
        body: Dict[str, Any],
        headers: Dict[str, str],
        cancel: Optional[CancellationToken],
    ) -> Dict[str, Any]:
        """POST ``body`` and return the decoded JSON of a 2xx answer."""
        if cancel is not None:
            cancel.raise_if_cancelled()
        http = self._http()
        request = http.build_request("POST", self.config.generate_url, json=body, headers=headers)
        response = self._send(http, request, cancel)
        unregister: Optional[Callable[[], None]] = None
        try:
            if cancel is not None:
                unregister = cancel.register(response.close)
            raw = self._read_body(response, cancel)
            if not response.is_success:
                raise self._error_from_response(response, raw)
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise self._transport_error(exc, cancel) from exc
        finally:
            if unregister is not None:
                unregister()
            response.close()
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.MALFORMED_RESPONSE,
                message="Invalid response from AIDE API: body is not JSON",
                model=self.model_id,
                status_code=response.status_code,
            ) from exc

    def _execute(self, converted: ConvertedRequest, options: CallOptions) -> UnifiedResult:
        cancel = options.cancellation_token
        if cancel is not None:
            cancel.raise_if_cancelled()
        token = self.config.get_token(cancel)
        payload = self._post(converted.body, self._headers(token, options.headers), cancel)
        result = parse_response(payload, self.model_info)
        return replace(
            result,
            warnings=tuple(converted.warnings),
            request_body=converted.body,
            response_body=payload,
        )

    # ---- public API ----

    def generate(self, options: CallOptions) -> UnifiedResult:
        """Run one non-streaming call.

        Raises:
            ProviderError: configuration, auth, gateway, or malformed-response failures.
            CancelledError: when ``options.cancellation_token`` is cancelled.
        """
        ctx = self._ctx()
        normalized_log_event(self._logger, "generate.start", ctx, phase="start", attempt=1)
        t0 = time.perf_counter()
        try:
            result = self._execute(self.build_request(options), options)
        except (ProviderError, CancelledError) as exc:
            code = exc.code.value if isinstance(exc, ProviderError) else ErrorCode.CANCELLED.value
            normalized_log_event(
                self._logger,
                "generate.error",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=code,
                emitted=False,
                level=logging.ERROR,
            )
            raise
        ctx.request_id = result.backend_request_id
        normalized_log_event(
            self._logger,
            "generate.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            tokens=result.usage,
            finish_reason=result.finish_reason.unified,
            latency_ms=round((time.perf_counter() - t0) * 1000, 2),
        )
        return result

    def stream(self, options: CallOptions) -> StreamResponse:
        """Run one call and replay the result as simulated stream events.

        Failures before a result exists are reported in-band as
        ``stream-start`` + ``error``; this method itself does not raise them.
        """
        ctx = self._ctx()
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1)
        request_body: Optional[Dict[str, Any]] = None
        try:
            converted = self.build_request(options)
            request_body = converted.body
            result = self._execute(converted, options)
        except Exception as exc:  # noqa: BLE001 - reported in-band
            code = exc.code.value if isinstance(exc, ProviderError) else (
                ErrorCode.CANCELLED.value if isinstance(exc, CancelledError) else ErrorCode.INTERNAL.value
            )
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                attempt=1,
                error_code=code,
                emitted=False,
                level=logging.ERROR,
            )
            return StreamResponse(events=error_stream(exc), request_body=request_body)
        return StreamResponse(events=simulate_stream(result), request_body=request_body)


__all__ = ["AideLanguageModel", "GatewayConfig", "StreamResponse", "TokenSupplier"]
