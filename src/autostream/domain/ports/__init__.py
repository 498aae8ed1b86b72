from .stream_source import StreamSourcePort
from .title_resolver import TitleResolverPort

__all__ = [
    "StreamSourcePort",
    "TitleResolverPort",
]
