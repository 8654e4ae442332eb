from .monitor import ReconMonitor
from .recon import RECON, checkAlphaConsistency
from .recon_api import findHomography, findLine, findModel
