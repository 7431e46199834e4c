import numpy as np
import pandas as pd
import pytest

from modelinsight.config import config


@pytest.fixture(autouse=True)
def default_config():
    config.reset()
    yield
    config.reset()


@pytest.fixture(scope="module")
def sleepstudy():
    rng = np.random.default_rng(1234)
    subjects = [str(subject) for subject in range(308, 326)]
    days = np.tile(np.arange(10), len(subjects))
    return pd.DataFrame(
        {
            "Reaction": 250 + 10 * days + rng.normal(scale=25, size=180),
            "Days": days,
            "Subject": np.repeat(subjects, 10),
        }
    )


@pytest.fixture(scope="module")
def wine():
    rng = np.random.default_rng(1234)
    return pd.DataFrame(
        {
            "response": rng.normal(loc=30, scale=10, size=72),
            "rating": rng.integers(1, 6, size=72),
            "temp": np.tile(np.repeat(["cold", "warm"], 4), 9),
            "contact": np.tile(["no", "no", "yes", "yes"], 18),
            "bottle": np.tile(np.arange(1, 9), 9),
            "judge": np.repeat(np.arange(1, 10), 8),
        }
    )


@pytest.fixture(scope="module")
def soup():
    rng = np.random.default_rng(1234)
    return pd.DataFrame(
        {
            "RESP": np.repeat(np.arange(1, 186), 10)[:1847],
            "PROD": rng.choice(["Reference", "Test"], size=1847),
            "PRODID": rng.integers(1, 7, size=1847),
            "SURENESS": rng.integers(1, 7, size=1847),
            "DAY": rng.choice(["1", "2"], size=1847),
        }
    )


@pytest.fixture(scope="module")
def crime():
    rng = np.random.default_rng(1234)
    return pd.DataFrame(
        {
            "county": np.repeat(np.arange(1, 91), 7),
            "year": np.tile(np.arange(81, 88), 90),
            "lcrmrte": rng.normal(loc=-3.6, scale=0.5, size=630),
            "lprbarr": rng.normal(loc=-1.3, scale=0.4, size=630),
            "lmix": rng.normal(loc=-2.5, scale=0.6, size=630),
            "lpolpc": rng.normal(loc=-6.4, scale=0.5, size=630),
        }
    )
