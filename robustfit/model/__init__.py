from .element_set import ElementSet, FullElementSet, MaskElementSet
from .models import Model, Line, Homography
