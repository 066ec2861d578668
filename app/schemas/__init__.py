from app.schemas.common import AuditInfo, IDAndSlug
from app.schemas.collection import json_type, decode_collection, collection_body
from app.schemas.token import TokenPayload
from app.schemas.profile import Profile
from app.schemas.domain import Domain
from app.schemas.project import Project, ProjectCreate, ProjectUpdate, ProjectCount
from app.schemas.instrument import Instrument, InstrumentCreate, InstrumentUpdate, InstrumentCount
from app.schemas.instrument_group import InstrumentGroup, InstrumentGroupCreate, InstrumentGroupUpdate
from app.schemas.instrument_note import InstrumentNote, InstrumentNoteCreate, InstrumentNoteUpdate
from app.schemas.instrument_status import InstrumentStatus, InstrumentStatusCreate
from app.schemas.timeseries import (
    Timeseries,
    TimeseriesCreate,
    TimeseriesUpdate,
    Measurement,
    MeasurementCollection,
)
from app.schemas.plot_configuration import PlotConfiguration, PlotConfigurationCreate, PlotConfigurationUpdate
from app.schemas.aware import AwareParameter, AwarePlatformParameterConfig
