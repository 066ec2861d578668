from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from app.models.aware import AwareParameter, AwarePlatform, AwarePlatformParameterEnabled
from app.models.timeseries import Timeseries
from app.schemas.aware import AwarePlatformParameterConfig

from app.utils.logger import get_logger
logger = get_logger(__name__)


class CRUDAware:
    async def get_parameters(self, db: AsyncSession) -> List[AwareParameter]:
        result = await db.execute(select(AwareParameter).order_by(AwareParameter.key))
        return list(result.scalars().all())

    async def get_data_acquisition_config(self, db: AsyncSession) -> List[AwarePlatformParameterConfig]:
        """
        Enabled parameters of every AWARE platform, each mapped to the
        platform instrument's timeseries with the same parameter and unit
        (None when the instrument has no such timeseries)
        """
        result = await db.execute(
            select(
                AwarePlatform.aware_id,
                AwarePlatform.instrument_id,
                AwareParameter.key,
                Timeseries.id.label("timeseries_id"),
            )
            .join(
                AwarePlatformParameterEnabled,
                AwarePlatformParameterEnabled.aware_platform_id == AwarePlatform.id,
            )
            .join(AwareParameter, AwareParameter.id == AwarePlatformParameterEnabled.aware_parameter_id)
            .outerjoin(
                Timeseries,
                and_(
                    Timeseries.instrument_id == AwarePlatform.instrument_id,
                    Timeseries.parameter_id == AwareParameter.parameter_id,
                    Timeseries.unit_id == AwareParameter.unit_id,
                ),
            )
            .order_by(AwarePlatform.aware_id, AwareParameter.key)
        )

        configs: Dict[Any, AwarePlatformParameterConfig] = {}
        for row in result.all():
            config = configs.get(row.aware_id)
            if config is None:
                config = AwarePlatformParameterConfig(aware_id=row.aware_id, instrument_id=row.instrument_id)
                configs[row.aware_id] = config
            # First matching timeseries wins when an instrument has several
            if config.aware_parameters.get(row.key) is None:
                config.aware_parameters[row.key] = row.timeseries_id
        logger.debug(f"Built AWARE acquisition config for {len(configs)} platform(s)")
        return list(configs.values())


aware = CRUDAware()
