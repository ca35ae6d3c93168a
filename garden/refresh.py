# garden/refresh.py
"""
Periodic growth refresh.

Every non-mature, unharvested plant is re-run through the growth calculator
with its garden owner's last known weather; stage / maturity changes are
written back to the store. The UI computes growth on the fly, so this job only
keeps the cached columns roughly current.
"""

import logging
import time
from collections import defaultdict
from typing import NamedTuple

logger = logging.getLogger(__name__)


class RefreshReport(NamedTuple):
    checked: int
    updated: int
    matured: int


class GrowthRefreshJob:
    def __init__(self, store, calculator=None, cfg=None):
        cfg = cfg or {}
        self.store = store
        self.calculator = calculator or store.calculator
        self.interval_seconds = cfg.get('interval_seconds', 60)

    def run_once(self, now=None):
        now = now if now is not None else self.calculator.clock()
        by_owner = defaultdict(list)
        for instance in self.store.unharvested(mature=False):
            by_owner[instance.garden_owner_id].append(instance)

        checked = updated = matured = 0
        for owner_id, instances in by_owner.items():
            weather = self.store.weather_for(owner_id)
            checked += len(instances)
            for update in self.calculator.garden_growth(instances, self.store.plant_types, weather, now):
                self.store.update_growth(update.instance.id, update.stage, update.is_mature)
                updated += 1
                if update.is_mature:
                    matured += 1
                logger.debug("Planted %s (%s, %s): stage %d, progress %.0f%%, mature=%s",
                             update.instance.id, owner_id, weather, update.stage, update.progress,
                             update.is_mature)

        report = RefreshReport(checked, updated, matured)
        logger.info("Growth refresh: checked=%d updated=%d matured=%d", *report)
        return report

    def run(self, iterations=None, sleep=time.sleep):
        """Refresh every `interval_seconds`; forever when `iterations` is None. Returns the last report."""
        report = None
        count = 0
        while iterations is None or count < iterations:
            if count:
                sleep(self.interval_seconds)
            report = self.run_once()
            count += 1
        return report
