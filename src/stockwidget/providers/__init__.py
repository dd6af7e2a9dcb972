"""Quote provider registry."""

from __future__ import annotations

from stockwidget.config import ProviderType
from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.providers.base import BaseQuoteProvider

# Dotted paths, imported on first use so the HTTP providers stay unloaded
# when the mock provider is selected.
PROVIDER_CLASSES: dict[ProviderType, str] = {
    ProviderType.ALPHAVANTAGE: "stockwidget.providers.alphavantage.AlphaVantageProvider",
    ProviderType.FINNHUB: "stockwidget.providers.finnhub.FinnhubProvider",
    ProviderType.MOCK: "stockwidget.providers.mock.MockProvider",
}


def resolve_provider_type(name: ProviderType | str) -> ProviderType:
    """Map a provider name such as ``" Finnhub "`` to its ``ProviderType``.

    Raises:
        StockWidgetError: ``CONFIG_ERROR`` for a name with no registered provider.
    """
    if isinstance(name, ProviderType):
        return name
    try:
        return ProviderType(str(name).strip().lower())
    except ValueError as exc:
        valid = ", ".join(p.value for p in ProviderType)
        raise StockWidgetError(
            f"Unknown provider {name!r}. Valid: {valid}",
            code=ErrorCode.CONFIG_ERROR,
        ) from exc


def create_provider(provider_type: ProviderType | str, **kwargs) -> BaseQuoteProvider:
    """Instantiate a provider by type or name, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[resolve_provider_type(provider_type)]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseQuoteProvider", "PROVIDER_CLASSES", "create_provider", "resolve_provider_type"]
