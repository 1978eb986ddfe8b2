# e2eframework

Building blocks for writing end-to-end test suites in Python. It has no
dependencies beyond the standard library.

- `e2eframework.flags` parses a suite's command-line filters into a frozen
  `EnvFlags` value.
- `e2eframework.config` holds an environment's `Config`: namespace,
  kubeconfig path, kubeconfig context, regular-expression filters, label
  filters and run modes.
- `e2eframework.features` defines testable features made of setup,
  assessment and teardown steps, built fluently or from a table.

## Installation

```
pip install e2eframework
```

## Flags

`flags.parse_args(args)` parses a list of arguments, and `flags.parse()`
parses the process arguments (`sys.argv[1:]`). Each flag may be written with
one dash or two:

| Flag | `EnvFlags` field |
| --- | --- |
| `--feature` | `feature` |
| `--assess` | `assess` |
| `--labels` | `labels` |
| `--skip-labels` | `skip_labels` |
| `--skip-features` | `skip_features` |
| `--skip-assessment` | `skip_assessment` |
| `--kubeconfig` | `kubeconfig` |
| `--namespace` | `namespace` |
| `--context` | `kube_context` |
| `--parallel` | `parallel` |
| `--dry-run` | `dry_run` |
| `--fail-fast` | `fail_fast` |
| `--disable-graceful-teardown` | `disable_graceful_teardown` |

Label flags take comma-separated `key=value` pairs and may be repeated; the
values collect in a `LabelsMap`, a `dict` of key to list of values:

```python
from e2eframework.flags import parse_args

flags = parse_args(["--labels", "k0=v0, k0=v01, k1=v1", "-parallel"])
flags.labels                       # {"k0": ["v0", "v01"], "k1": ["v1"]}
flags.labels.contains("k0", "v01") # True
flags.parallel                     # True
```

Unknown flags, missing values, badly formed labels, and `--fail-fast`
together with `--parallel` raise `flags.FlagError` (a `ValueError`).

## Configuration

```python
from e2eframework.config import Config, new_from_flags, new_with_kubeconfig, random_name

cfg = new_from_flags(["--labels", "env=dev", "--feature", "beta"])
cfg.labels.contains("env", "dev")  # True
cfg.feature_regex.pattern          # "beta"

cfg = Config().with_namespace("demo").with_fail_fast()
cfg = new_with_kubeconfig("/tmp/kubeconfig").with_random_namespace()

random_name("testns-", 16)  # e.g. "testns--3fa81c0d"
```

Every `with_*` method updates the configuration and returns it, so calls
chain. Regex filters are stored compiled; an invalid pattern raises
`re.error`. `random_name(prefix, n)` returns a name `n` characters long
(32 when `n` is 0) and returns the prefix unchanged when it is already at
least `n` long.

## Features

A step function is called with a context, a test handle and a `Config`,
and returns the context.

```python
from e2eframework.features import FeatureBuilder, Level, get_steps_by_level, filter_steps_by_name

def check_greeting(ctx, t, cfg):
    return ctx

feature = (
    FeatureBuilder("Hello Feature")
    .with_label("type", "simple")
    .setup(check_greeting)             # named "Hello Feature-setup"
    .assess("test message", check_greeting)
    .teardown(check_greeting)          # named "Hello Feature-teardown"
    .feature()
)

get_steps_by_level(feature.steps, Level.ASSESS)    # the one assessment
filter_steps_by_name(feature.steps, "setup$")      # the setup step
```

Table-driven features turn each entry with an assessment into an assessment
step; unnamed entries are called `Assessment-<index>`:

```python
from e2eframework.features import Table, TableEntry

feature = Table([TableEntry("first", check_greeting), TableEntry(assessment=check_greeting)]).build("greetings").feature()
[step.name for step in feature.steps]  # ["first", "Assessment-1"]
```

## What this package does not do

It describes and configures test suites but does not run them: there is no
environment that executes features and their steps, no cluster or client
handling, and no command-line program. The `client` field of `Config` is
only stored for callers that supply one.

## Running the tests

```
pip install -e ".[test]"
pytest
```