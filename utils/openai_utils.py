import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from openai import AsyncOpenAI, OpenAI
from openai.types.chat import ChatCompletion, ChatCompletionMessageParam

__all__ = ["safe_chat_completion", "completion_text"]


async def safe_chat_completion(
    client: AsyncOpenAI | OpenAI,
    *,
    model: str,
    messages: Iterable[dict[str, Any]],
    logger: logging.Logger | None = None,
    retry_attempts: int = 2,
    retry_backoff: float = 0.5,
    timeout: float | None = None,
    **kwargs,
) -> ChatCompletion:
    """Invoke the chat completion endpoint with bounded retries.

    Parameters
    ----------
    client:
        An initialised ``openai.AsyncOpenAI`` client instance.
    model:
        The model name to call (e.g. ``"gpt-4o-mini"``).
    messages:
        The messages for the chat completion endpoint.
    logger:
        Optional logger for diagnostics; if omitted a module-level logger is used.
    retry_attempts:
        Total number of attempts. The default of 2 means one retry after a
        transient failure.
    retry_backoff:
        Base back-off (in seconds); the delay grows exponentially
        (``backoff * 2**(attempt-1)``).
    timeout:
        Per-request timeout in seconds, forwarded to the SDK.
    **kwargs:
        Additional keyword arguments forwarded to ``client.chat.completions.create``.

    Returns
    -------
    ChatCompletion
        The raw response object returned by the OpenAI SDK.

    Raises
    ------
    Exception
        Re-raises the last encountered exception if all attempts fail.
    """
    if client is None:
        raise RuntimeError("OpenAI client is not initialised.")

    if not isinstance(client, AsyncOpenAI):
        raise TypeError("Sync OpenAI client provided to async safe_chat_completion.")

    logger = logger or logging.getLogger(__name__)
    retry_attempts = max(1, retry_attempts)
    last_exc: Exception | None = None
    typed_messages: Iterable[ChatCompletionMessageParam] = messages  # type: ignore[assignment]
    if timeout is not None:
        kwargs["timeout"] = timeout

    for attempt in range(1, retry_attempts + 1):
        try:
            start_ts = asyncio.get_running_loop().time()
            completion = await client.chat.completions.create(
                model=model,
                messages=typed_messages,
                **kwargs,
            )
            latency = asyncio.get_running_loop().time() - start_ts
            logger.debug(
                "OpenAI completions.create call succeeded | model=%s | latency=%.2fs",
                model,
                latency,
            )
            return completion
        except Exception as exc:  # noqa: BLE001
            last_exc = exc
            logger.warning("OpenAI call failed (attempt %s/%s): %s", attempt, retry_attempts, exc)
            if attempt < retry_attempts:
                await asyncio.sleep(retry_backoff * (2 ** (attempt - 1)))

    assert last_exc is not None  # for type checkers
    raise last_exc


def completion_text(completion: ChatCompletion | None) -> str:
    """Return the stripped text of the first choice, or an empty string."""
    if not completion or not completion.choices:
        return ""
    content = completion.choices[0].message.content
    return content.strip() if content else ""
