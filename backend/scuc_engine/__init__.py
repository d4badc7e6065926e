"""Day-ahead unit commitment and economic dispatch engine.

Subpackages:

* **network** -- linear solver, susceptance model and DC power flow.
* **dispatch** -- merit-order unit commitment and economic dispatch.
* **simulation** -- the 24-hour simulation driver and result records.
"""
