"""Shared constants: colors, labels, glossary, workflow stages."""

SPECIES_COLORS = {
    "O. exclamationis": "#E63946",
    "O. niveus": "#2A9D8F",
}

SPECIES_LIST = list(SPECIES_COLORS.keys())

FEATURE_COLS = ["temp", "rate"]

FEATURE_LABELS = {
    "temp": "Temperature (°C)",
    "rate": "Chirp Rate (per minute)",
    "species": "Species",
}

FEATURE_UNITS = {
    "temp": "°C",
    "rate": "chirps/min",
}

PART_TITLES = {
    "I": "Foundations",
    "II": "The Modeling Process",
    "III": "Modeling Fundamentals",
}

# Page file and title of each chapter, in reading order.
CHAPTERS = [
    ("01_Types_of_Models.py", "Types of Models"),
    ("02_Modeling_Terminology.py", "Modeling Terminology"),
    ("03_Data_Science_Workflow.py", "The Data Science Workflow"),
    ("04_Exploring_the_Crickets.py", "Exploring the Crickets"),
    ("05_Model_Formulas.py", "Model Formulas"),
    ("06_Fitting_and_Comparing_Models.py", "Fitting and Comparing Models"),
    ("07_Tidying_Model_Results.py", "Tidying Model Results"),
]

GLOSSARY = {
    "Descriptive model": (
        "A model used to summarize or characterize properties of an observed dataset. "
        "Think of a smooth trend line drawn through a scatter plot: nobody tests it, "
        "nobody predicts with it, it just shows the shape of the data."
    ),
    "Inferential model": (
        "A model used to test a predefined hypothesis about a population. The hypothesis "
        "comes first, and validation of the conclusions typically happens long after the "
        "model is built, sometimes years later."
    ),
    "Predictive model": (
        "A model optimized to produce accurate estimates for new, unseen inputs rather "
        "than to test a hypothesis. Judged by how close its predictions land, not by p-values."
    ),
    "Mechanistic model": (
        "A predictive model whose form is derived from first principles (physics, chemistry, "
        "biology), with data used only to estimate the unknown parameters."
    ),
    "Empirically driven model": (
        "A predictive model whose form is chosen for its ability to fit and predict, with "
        "few assumptions about the process that generated the data."
    ),
    "Supervised": (
        "A modeling regime in which a designated outcome (target) variable is present "
        "during training and the model learns to map predictors onto it."
    ),
    "Unsupervised": (
        "A modeling regime with no outcome variable: the goal is to find patterns, "
        "clusters or structure among the columns themselves."
    ),
    "Regression": "A supervised model whose outcome variable is numeric.",
    "Classification": "A supervised model whose outcome variable is categorical.",
    "Outcome": "The variable being modeled or predicted. Also called the target or dependent variable.",
    "Predictor": "A variable used to model the outcome. Also called a feature or independent variable.",
    "Quantitative": "Data that are numbers: real numbers like 3.14 or integers like 42.",
    "Qualitative": "Data that are categories: values like 'O. niveus' or 'red' with no arithmetic meaning.",
    "Model formula": (
        "A declarative specification of which columns of a tabular dataset serve as outcome "
        "and predictors, and how they should be encoded (interactions, polynomial terms, "
        "categorical dummy encoding) before being passed to a model-fitting routine."
    ),
}

MODEL_TYPES = {
    "Descriptive": {
        "description": GLOSSARY["Descriptive model"],
        "example": "A smoother drawn through chirp rate vs temperature to show the trend.",
        "question": "What does the data look like?",
    },
    "Inferential": {
        "description": GLOSSARY["Inferential model"],
        "example": "Testing whether the temperature slope differs between the two species.",
        "question": "Is this effect real, or could it be chance?",
    },
    "Predictive": {
        "description": GLOSSARY["Predictive model"],
        "example": "Estimating the chirp rate of a new cricket heard at 25 °C.",
        "question": "What value should we expect for a new observation?",
    },
}

WORKFLOW_STAGES = [
    ("Import", "Get the data into a tabular structure you can work with."),
    ("Tidy", "One row per observation, one column per variable."),
    ("Transform", "Filter, derive and reshape the columns you actually need."),
    ("Visualize", "Plot the data to see relationships and surprises."),
    ("Model", "Fit models that summarize, test or predict."),
    ("Communicate", "Report results so someone else can act on them."),
]

# Transform, Visualize and Model are iterated together as "understand"
UNDERSTAND_STAGES = ["Transform", "Visualize", "Model"]

MODELING_PROCESS = [
    ("Exploratory data analysis", "Back-and-forth of numerical summaries and plots to learn what the data are."),
    ("Feature engineering", "Create model terms that make it easier to model the outcome well."),
    ("Model tuning and selection", "Generate a variety of candidate models and compare them."),
    ("Model evaluation", "Assess performance with metrics and plots before choosing a final model."),
]

FORMULA_EXAMPLES = {
    "rate ~ temp": "Chirp rate as a straight-line function of temperature.",
    "rate ~ temp + species": (
        "Add species. Because it is qualitative, it becomes a 0/1 dummy column for every "
        "level except the first (the reference level)."
    ),
    "rate ~ temp + species + temp:species": (
        "Add an interaction: the temperature slope is allowed to differ between species."
    ),
    "rate ~ temp * species": "Shorthand for the previous formula: main effects plus their interaction.",
    "rate ~ (temp + species) ** 2": "All main effects and all two-way interactions among them.",
    "rate ~ temp + I(temp ** 2) + species": (
        "A quadratic term. I() evaluates the arithmetic inline instead of treating ** as formula syntax."
    ),
    "rate ~ np.log(temp) + species": "Transform a predictor with any numpy function inside the formula.",
    "rate ~ temp + species - 1": "Remove the intercept: each species now gets its own intercept column.",
    "rate ~ temp + C(species, Treatment(reference='O. niveus'))": (
        "Change the reference level so the dummy column describes O. exclamationis instead."
    ),
}
