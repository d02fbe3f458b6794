# Importing the package registers every mapped class on Base.metadata
from .auto import Auto, Autoart
from .fahrzeugschein import Fahrzeugschein
from .ausstattung import Ausstattung
from .auto_file import AutoFile
