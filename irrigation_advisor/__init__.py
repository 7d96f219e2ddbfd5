"""
Irrigation Advisor - crop water demand and irrigation timing engine
Version: 1.0.0
"""

__version__ = "1.0.0"

# Core modules
from . import inputs
from . import errors
from . import growth
from . import tables
from . import et
from . import constraints
from . import advisory
from . import validation
from . import engine

# Weather collaborator
from . import config
from . import weather

from .engine import RecommendationEngine, generate_recommendation
from .errors import ValidationError, WeatherDataError
from .inputs import CropInput, GrowthStage, Recommendation, SoilInput, TimeOfDay, WeatherInput

__all__ = [
    # Core
    'inputs', 'errors', 'growth', 'tables', 'et', 'constraints', 'advisory', 'validation', 'engine',
    # Weather
    'config', 'weather',
    'RecommendationEngine', 'generate_recommendation', 'ValidationError', 'WeatherDataError',
    'CropInput', 'GrowthStage', 'Recommendation', 'SoilInput', 'TimeOfDay', 'WeatherInput',
]
