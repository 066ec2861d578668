from app.models.profile import Profile, Role, ProfileProjectRole
from app.models.domain import InstrumentType, Parameter, Unit, Status
from app.models.project import Office, Project, ProjectTimeseries
from app.models.instrument import Instrument
from app.models.instrument_group import InstrumentGroup, InstrumentGroupInstruments
from app.models.instrument_note import InstrumentNote
from app.models.instrument_status import InstrumentStatus
from app.models.timeseries import Timeseries, TimeseriesMeasurement
from app.models.plot_configuration import PlotConfiguration, PlotConfigurationTimeseries
from app.models.aware import AwareParameter, AwarePlatform, AwarePlatformParameterEnabled
