from .version import __version__ as __version__

__title__ = "Kamisado"
__description__ = "A small feedback-driven stream cipher library."
__license__ = "Apache-2.0"
