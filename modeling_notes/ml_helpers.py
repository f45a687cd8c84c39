"""Hold-out evaluation helpers for the predictive-model demonstrations."""
import logging

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from sklearn.model_selection import train_test_split

from modeling_notes.settings import SEED, TEST_SIZE

logger = logging.getLogger(__name__)


def holdout_split(df, test_size=TEST_SIZE, stratify="species", seed=SEED):
    """Split rows into training and test sets, stratified by a column if given."""
    strata = df[stratify] if stratify else None
    train, test = train_test_split(
        df, test_size=test_size, random_state=seed, stratify=strata
    )
    logger.debug("Hold-out split: %d train / %d test rows", len(train), len(test))
    return train.copy(), test.copy()


def regression_metrics(y_true, y_pred):
    """Compute regression metrics."""
    return {
        "mse": mean_squared_error(y_true, y_pred),
        "rmse": np.sqrt(mean_squared_error(y_true, y_pred)),
        "mae": mean_absolute_error(y_true, y_pred),
        "r2": r2_score(y_true, y_pred),
    }
