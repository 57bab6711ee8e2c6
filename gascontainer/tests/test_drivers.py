"""
Test: producer / consumer driver loops

Verifies:
- Threshold decisions and mass quantities
- Loop exits once the container is observed destroyed
- Retry on transport and service errors
- End-to-end run against the in-process facade
"""

import sys
import threading
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from gascontainer.client import ServiceError, TransportError
from gascontainer.data_types import ContainerConfig, DriverAction, DriverConfig
from gascontainer.drivers import ConsumerDriver, ProducerDriver
from gascontainer.rng import make_generator
from gascontainer.service import GasContainerContract, build_service


class ScriptedService(GasContainerContract):
    """
    Fake container: returns scripted pressures, destroyed after the script
    runs out, and optionally raises scripted errors first.
    """

    def __init__(self, pressures: List[float], errors: Optional[List[Exception]] = None):
        self.pressures = list(pressures)
        self.errors = list(errors or [])
        self.increases: List[float] = []
        self.decreases: List[float] = []

    def increase_mass(self, mass: float) -> None:
        self.increases.append(mass)

    def decrease_mass(self, mass: float) -> None:
        self.decreases.append(mass)

    def get_pressure(self) -> float:
        return self.pressures.pop(0)

    def is_destroyed(self) -> bool:
        if self.errors:
            raise self.errors.pop(0)
        return not self.pressures


def fast_config(**overrides) -> DriverConfig:
    """No waiting between polls or retries"""
    values = dict(
        poll_interval_seconds=0.0,
        connect_retry_seconds=0.0,
        error_retry_seconds=0.0,
        seed=2024
    )
    values.update(overrides)
    return DriverConfig(**values)


def test_producer_adds_below_threshold():
    service = ScriptedService([100.0, 149.9, 150.0, 200.0])
    driver = ProducerDriver(service, fast_config())

    actions = [driver.step() for _ in range(4)]

    assert actions == [
        DriverAction.ADJUSTED,
        DriverAction.ADJUSTED,
        DriverAction.SKIPPED,
        DriverAction.SKIPPED,
    ]
    assert len(service.increases) == 2
    assert service.decreases == []
    assert all(1 <= m <= 4 for m in service.increases)

    # Script exhausted -> destroyed
    assert driver.step() is DriverAction.STOPPED
    print("[OK] Producer respects threshold\n")


def test_consumer_removes_above_threshold():
    service = ScriptedService([150.0, 150.1, 170.0, 90.0])
    driver = ConsumerDriver(service, fast_config())

    actions = [driver.step() for _ in range(4)]

    assert actions == [
        DriverAction.SKIPPED,
        DriverAction.ADJUSTED,
        DriverAction.ADJUSTED,
        DriverAction.SKIPPED,
    ]
    assert len(service.decreases) == 2
    assert service.increases == []


def test_run_exits_when_destroyed():
    service = ScriptedService([100.0] * 5)
    driver = ProducerDriver(service, fast_config())

    completed = driver.run()

    # Five pressure polls plus the poll that observed destruction
    assert completed == 6
    assert len(service.increases) == 5


def test_mass_quantities_cover_range():
    service = ScriptedService([0.0] * 200)
    driver = ProducerDriver(service, fast_config())
    driver.run()

    assert set(service.increases) == {1, 2, 3, 4}


def test_seeded_quantities_reproducible():
    a = ScriptedService([0.0] * 20)
    b = ScriptedService([0.0] * 20)
    ProducerDriver(a, fast_config(seed=11)).run()
    ProducerDriver(b, fast_config(seed=11)).run()

    assert a.increases == b.increases


def test_retry_on_errors():
    service = ScriptedService(
        [100.0, 100.0],
        errors=[TransportError("refused"), ServiceError(500, "boom"), TransportError("refused")]
    )
    driver = ProducerDriver(service, fast_config())

    completed = driver.run()

    assert completed == 3
    assert len(service.increases) == 2
    assert service.errors == []
    print("[OK] Driver retried through 3 failures\n")


def test_max_steps():
    service = ScriptedService([100.0] * 10)
    driver = ConsumerDriver(service, fast_config())

    assert driver.run(max_steps=3) == 3
    assert len(service.pressures) == 7


def test_stop_from_another_thread():
    class EndlessService(ScriptedService):
        def get_pressure(self) -> float:
            return 100.0

        def is_destroyed(self) -> bool:
            return False

    service = EndlessService([])
    driver = ProducerDriver(service, fast_config(poll_interval_seconds=0.01))
    result = []

    t = threading.Thread(target=lambda: result.append(driver.run()))
    t.start()
    driver.stop()
    t.join(timeout=2.0)

    assert not t.is_alive()
    assert result and result[0] >= 0


def test_against_in_process_facade():
    """Producer drives the real logic unit; rejections are invisible to it"""
    service, logic = build_service(ContainerConfig(seed=1))
    producer = ProducerDriver(service, fast_config(), rng=make_generator(3, "producer"))

    # p ~= 130.8 < 150: producer asks, core silently refuses (p >= 110)
    completed = producer.run(max_steps=5)

    assert completed == 5
    assert logic.get_snapshot()['mass'] == 10.0
    assert service.is_destroyed() is False


def test_consumer_against_in_process_facade():
    service, logic = build_service(ContainerConfig(seed=1))
    consumer = ConsumerDriver(service, fast_config(pressure_threshold=120.0))

    consumer.run(max_steps=1)

    # p ~= 130.8 > 125 and > 120: one decrease applied
    assert logic.get_snapshot()['mass'] < 10.0


if __name__ == '__main__':
    print("=" * 60)
    print("Test: Producer / Consumer Drivers")
    print("=" * 60)
    print()

    try:
        test_producer_adds_below_threshold()
        test_consumer_removes_above_threshold()
        test_run_exits_when_destroyed()
        test_retry_on_errors()
        test_against_in_process_facade()

    except Exception as e:
        print(f"\n[FAIL] Test failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    print("=" * 60)
    print("[PASS] All driver tests passed!")
    print("=" * 60)
