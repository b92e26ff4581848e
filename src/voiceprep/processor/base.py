from abc import ABC, abstractmethod

from voiceprep.domain.models import SampleBuffer


class BaseProcessor(ABC):
    """Base class for buffer-to-buffer processing stages."""

    @abstractmethod
    def process(self, buffer: SampleBuffer) -> SampleBuffer:
        """Process a buffer and return a newly owned buffer."""
        raise NotImplementedError
