from .aware import aware
from .domain import domain
from .instrument import instrument
from .instrument_group import instrument_group
from .instrument_note import instrument_note
from .instrument_status import instrument_status
from .plot_configuration import plot_configuration
from .profile import profile
from .project import project
from .timeseries import timeseries
from .timeseries_measurement import timeseries_measurement
