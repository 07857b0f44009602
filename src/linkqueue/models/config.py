"""Pydantic option models for linkqueue."""

from typing import Any, Callable, Optional, Union

from bs4 import Tag
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..exceptions import ConfigurationError
from ..urls import is_absolute_url
from .request import Request

DEFAULT_SELECTOR = "a"

# Returns the (possibly new) request, or a falsy value to drop it
RequestTransform = Callable[[Request], Optional[Union[Request, dict[str, Any]]]]


class EnqueueLinksOptions(BaseModel):
    """Options for a single enqueue_links() call."""

    queue: Any = Field(..., description="Request queue exposing add_request()")
    page: Any = Field(None, description="Rendered page exposing eval_on_selector_all()")
    document: Any = Field(None, description="BeautifulSoup tree or element, or raw HTML")
    selector: str = Field(DEFAULT_SELECTOR, min_length=1, description="CSS selector for link elements")
    base_url: Optional[str] = Field(
        None,
        min_length=1,
        description="Base URL for relative links in a static document (ignored for pages)",
    )
    # UrlPattern instances, built by _compile_patterns
    patterns: list[Any] = Field(
        default_factory=list,
        description="URL patterns links must match; empty means all links",
    )
    limit: Optional[int] = Field(None, ge=1, strict=True, description="Maximum number of requests to enqueue")
    transform: Optional[Callable[..., Any]] = Field(
        None,
        description="Hook to modify or drop each request before it is enqueued",
    )

    model_config = {"extra": "forbid"}

    @field_validator("queue")
    @classmethod
    def _check_queue(cls, v: Any) -> Any:
        if not callable(getattr(v, "add_request", None)):
            raise ValueError("queue must provide an add_request() method")
        return v

    @field_validator("page")
    @classmethod
    def _check_page(cls, v: Any) -> Any:
        if v is not None and not callable(getattr(v, "eval_on_selector_all", None)):
            raise ValueError("page must provide an eval_on_selector_all() method")
        return v

    @field_validator("document")
    @classmethod
    def _check_document(cls, v: Any) -> Any:
        if v is not None and not isinstance(v, (Tag, str, bytes)):
            raise ValueError(f"document must be a BeautifulSoup object or HTML string, got {type(v).__name__}")
        return v

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_absolute_url(v.strip()):
            raise ValueError(f"base_url must be an absolute URL with a scheme, got {v!r}")
        return v

    @field_validator("patterns", mode="before")
    @classmethod
    def _compile_patterns(cls, v: Any) -> list[Any]:
        from ..discovery.patterns import build_url_patterns

        return build_url_patterns(v)

    @model_validator(mode="after")
    def _check_source(self) -> "EnqueueLinksOptions":
        if self.page is None and self.document is None:
            raise ValueError("One of the options 'page' or 'document' must be provided")
        if self.page is not None and self.document is not None:
            raise ValueError("Only one of the options 'page' or 'document' may be provided")
        return self

    @classmethod
    def parse(cls, **options: Any) -> "EnqueueLinksOptions":
        """
        Validate options, raising ConfigurationError for the first violation.

        Raises:
            ConfigurationError: If any option is invalid
        """
        try:
            return cls(**options)
        except ValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(part) for part in error["loc"])
            message = error["msg"]
            if location:
                message = f"{location}: {message}"
            raise ConfigurationError(f"Invalid enqueue_links options: {message}") from e
