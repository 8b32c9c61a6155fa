class PostgenError(Exception):
    ''' Any condition that aborts the whole generation run. '''

class ConfigError(PostgenError):
    pass

class DiscoveryError(PostgenError):
    pass

class CapacityError(PostgenError):
    ''' Too many posts or a post too short to hold its metadata. '''

class MetadataError(PostgenError):
    pass

class DateError(MetadataError):
    pass

class FragmentError(PostgenError):
    pass

class PandocError(PostgenError):
    pass
