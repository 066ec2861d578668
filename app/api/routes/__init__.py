from .aware import router as aware_router
from .domains import router as domains_router
from .instrument_groups import router as instrument_groups_router
from .instrument_notes import router as instrument_notes_router
from .instrument_status import router as instrument_status_router
from .instruments import router as instruments_router
from .plot_configurations import router as plot_configurations_router
from .profiles import router as profiles_router
from .projects import router as projects_router
from .timeseries import router as timeseries_router
from .timeseries_measurements import router as timeseries_measurements_router
