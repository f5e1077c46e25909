from .owner import ChannelOwner
from .views import BrowsingContext, Channel, PageResolver

__all__ = ['BrowsingContext', 'Channel', 'ChannelOwner', 'PageResolver']
