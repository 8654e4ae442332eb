from .uniform_random_generator import UniformRandomGenerator
from .logger import setup_logger
