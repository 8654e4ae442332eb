from .monitor import RansacMonitor
from .ransac import RANSAC, getIterationNumber
from .ransac_api import findHomography, findLine, findModel
