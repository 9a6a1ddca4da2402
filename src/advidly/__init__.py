"""AdVidly - marketplace connecting advertisers with video creators."""

__version__ = "0.1.0"
