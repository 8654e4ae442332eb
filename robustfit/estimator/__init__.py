from .fitter import Fitter
from .fitter_line import FitterLine
from .fitter_homography import FitterHomography
