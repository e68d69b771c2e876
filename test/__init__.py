"""
Mailroom Robots - Test Suite
============================

Unit and end-to-end tests for the delivery robots, mail pool and
simulation driver.

Test Categories:
    - unit/test_state_machine.py : Robot state machine and slot rules
    - unit/test_mail_pool.py     : Loading and dispatching robots
    - unit/test_accounting.py    : Accountant, delivery sink, mail items
    - unit/test_simulation.py    : Clock, generator, driver and CLI
    - unit/test_config.py        : YAML config and overrides

Usage:
    # Run all tests
    pytest test/

    # Run one module with verbose output
    pytest test/unit/test_state_machine.py -v
"""
