from .version import __version__
from .Net import ArcDescriptor, Marking, PetriNet

__all__ = ["__version__", "ArcDescriptor", "Marking", "PetriNet"]
