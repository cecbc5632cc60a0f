"""Abstract base class for layout transformers."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from timetable.models import Configs, LaidOutEvent


class BaseTransformer(ABC):
    """Abstract base class defining the interface for layout transformers.
    
    Extend this class to turn laid-out events into an output format
    (e.g., a JSON layout document, an iCalendar file, etc.).
    """
    
    @abstractmethod
    def transform(self, laid_out: Sequence[LaidOutEvent], configs: Configs) -> Any:
        """Transform laid-out events into the target format.
        
        Args:
            laid_out: Events with their slots and rectangles, in input order.
            configs: Grid configs the events were laid out on.
            
        Returns:
            Transformed data in the target format.
        """
        pass
    
    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.
        
        Args:
            output_path: Path to the output file.
        """
        pass
