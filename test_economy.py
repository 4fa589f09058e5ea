"""
Tests for salary proration, cap space, trade valuation and match earnings.
"""
from models import Player, StaffMember, Team
from simulation.economy import (
    available_funds,
    bundle_value,
    cap_used,
    match_earnings,
    prorated_salary,
    signing_obligation,
    sponsor_money,
    trade_accepted,
    trade_value,
    weekly_payroll,
)


def _pilot(pid="p", salary=14, **kw):
    fields = dict(id=pid, gamertag=pid, role="Rusher", age=20, aim=80, iq=80, potential=90, contract_years=2)
    fields.update(kw)
    return Player(salary=salary, **fields)


def test_prorated_salary():
    assert prorated_salary(14, 1) == 14
    assert prorated_salary(14, 8) == 7
    assert prorated_salary(28, 14) == 2
    assert prorated_salary(10, 15) == 0
    assert prorated_salary(10, 20) == 0


def test_cap_used_with_accountant():
    team = Team(id="t", budget=100, roster=[_pilot("a"), _pilot("b")])
    assert cap_used(team, 1) == 28
    assert available_funds(team, 1) == 72
    team.staff["Accountant"] = StaffMember(name="Ledger", tier="Silver", bonus_val=0.10)
    assert cap_used(team, 1) == 25
    assert available_funds(team, 1) == 75


def test_signing_obligation_with_recruiter():
    team = Team(id="t")
    player = _pilot(salary=20)
    assert signing_obligation(player, team, 1) == 20
    assert signing_obligation(player, team, 8) == 10
    team.staff["Recruiter"] = StaffMember(name="Scout", tier="Gold", bonus_val=0.20)
    assert signing_obligation(player, team, 1) == 16


def test_trade_value():
    # 80 * 4 + (26 - 20) * 2 + (90 - 80) + 2 * 5
    assert trade_value(_pilot()) == 352
    veteran = _pilot(age=30, potential=70, contract_years=1)
    assert trade_value(veteran) == 80 * 4 + 0 + 0 + 5
    assert bundle_value([_pilot("a"), veteran]) == 352 + 325
    assert bundle_value([]) == 0


def test_trade_acceptance_needs_premium():
    assert not trade_accepted(100, 100)
    assert not trade_accepted(109, 100)
    assert trade_accepted(111, 100)
    assert trade_accepted(500, 100)


def test_weekly_payroll_and_sponsors():
    team = Team(id="t", roster=[_pilot("a", salary=20), _pilot("b", salary=15)])
    assert weekly_payroll(team) == 2
    assert weekly_payroll(Team(id="empty")) == 0
    assert sponsor_money(4999) == 0
    assert sponsor_money(12000) == 2


def test_match_earnings():
    team = Team(id="t")
    assert match_earnings(team, True, 12000) == 27
    assert match_earnings(team, False, 12000) == 14
    team.staff["Community Manager"] = StaffMember(name="Hype", tier="Gold", bonus_val=1.5)
    assert match_earnings(team, False, 12000) == 20
    assert match_earnings(team, True, 12000) == 39
    # playoff purses ignore the Community Manager
    assert match_earnings(team, True, 12000, is_playoff=True) == 102
    assert match_earnings(team, False, 0, is_playoff=True) == 50
