# fennelchain

An in-memory model of a small blockchain runtime. It holds the state and
rules of a few on-chain modules so that their behaviour can be exercised and
tested from plain Python. There are no third-party dependencies; Python 3.10
or later is required.

## Modules

- `fennelchain.frame`: shared building blocks.
  - `Weight` (reference time and proof size, with `saturating_add` and
    `saturating_mul`) and `RuntimeDbWeight` (`reads`, `writes`,
    `reads_writes`); `ROCKS_DB_WEIGHT` is the default database weight.
  - `Origin` with `Origin.signed(who)`, `Origin.root()` and `Origin.none()`,
    checked by `ensure_signed` and `ensure_root`.
  - `bounded(data, max_size)` turns `str` or byte-like data into `bytes` and
    raises `BoundExceeded` when it is too long.
  - `EventLog` records events in order (`deposit`, `last`, `contains`,
    `clear`; it is iterable and has a length).
  - `Balances` keeps free balances and named locks (`make_free_balance_be`,
    `free_balance`, `locked`, `ensure_can_withdraw`, `set_lock`,
    `extend_lock`, `remove_lock`). Locks overlap: `locked` is the largest one.
- `fennelchain.signal`: `SignalPallet`. Rating signals (`send_rating_signal`,
  `update_rating_signal`, `revoke_rating_signal`) set, extend and remove a
  balance lock of `lock_price`. `set_signal_parameter` stores a one-byte
  value under a name. `send_signal` and `send_service_signal` only emit
  events. Queries: `rating_signal`, `has_rating_signal`, `signal_parameter`,
  `has_signal_parameter`.
- `fennelchain.trust`: `TrustPallet`. An account can issue, remove, revoke
  and request trust toward another (`issue_trust`, `remove_trust`,
  `revoke_trust`, `remove_revoked_trust`, `request_trust`,
  `cancel_trust_request`) and set trust parameters (`set_trust_parameter`).
  The counters `current_issued`, `current_revoked` and `current_requests`
  count the active entries; each stored entry holds the counter value at the
  time it was made.
- `fennelchain.validator_manager`: `ValidatorManager` queues validators to add
  (`register_validators`) or remove (`remove_validator`) under a privileged
  origin (root by default). `Session` rotates sessions on a fixed block
  period (`on_initialize`, `rotate_session`), asks the manager for the next
  set through `new_session`, and stores session keys with `set_keys`. Queued
  changes take effect two sessions after they are applied. If applying them
  would leave fewer than `min_authorities` validators, the current set is
  kept; `remove_validator` refuses a removal that would go below the minimum.
- `fennelchain.runtime`: `Runtime` puts balances, session, validator manager,
  signal and trust modules together with one shared event log, and
  `run_to_block` initializes each block up to the given number. The module
  also holds the chain constants (`UNIT`, `SESSION_PERIOD`,
  `MIN_AUTHORITIES`, `SIGNAL_LOCK_PRICE`, ...), `VERSION` and
  `native_version()`.
- `fennelchain.signal_weights`, `fennelchain.trust_weights`,
  `fennelchain.validator_weights`: benchmark weight tables
  (`SignalWeightInfo`, `TrustWeightInfo`, `ValidatorManagerWeightInfo`).

## Example

```python
from fennelchain.frame import Origin
from fennelchain.runtime import UNIT, Runtime

runtime = Runtime(
    [("alice", "alice-session-keys"), ("bob", "bob-session-keys")],
    endowed={"alice": 10 * UNIT},
)

runtime.signal.send_rating_signal(Origin.signed("alice"), b"target", 5)
assert runtime.signal.rating_signal("alice", b"target") == 5

runtime.trust.issue_trust(Origin.signed("alice"), "bob")
assert runtime.trust.current_issued == 1

runtime.run_to_block(4)
print(runtime.session.current_index, runtime.session.validators)
```

## Errors

A call that the rules reject raises a subclass of `DispatchError`, for
example `TrustExists`, `RatingSignalDoesNotExist`, `TooFewValidators`,
`BadOrigin` or `BoundExceeded`. Some balance checks raise `DispatchError`
itself with a message such as `"LiquidityRestrictions"`. A value that does
not fit in a byte raises `ValueError`. State is left unchanged when a call
fails.

## What this package does not do

It is a state model only. There is no networking, block production,
consensus, transaction signing, fee charging or persistent storage, and no
command-line program; everything lives in memory for the life of the Python
objects. The weight tables report benchmark figures but nothing in the
package charges or limits calls by weight.

## Installation and tests

```
pip install .
pip install ".[test]"
pytest
```