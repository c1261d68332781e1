import asyncio

from fakes import FakeSolanaClient, ManualClock, new_address

from solfaucet.exec import claim_orchestrator as co


def test_claim_then_immediate_reclaim_hits_cooldown(make_orchestrator) -> None:
    client = FakeSolanaClient(balance_sol=0.02)
    orch = make_orchestrator(client)
    wallet = new_address()

    async def _run():
        return await orch.claim(wallet), await orch.claim(wallet)

    first, second = asyncio.run(_run())
    assert first.ok
    assert first.tx_hash == "sig1"
    assert second.status == co.COOLDOWN_ACTIVE
    assert second.hours_remaining == 24
    assert len(client.transfers) == 1


def test_cooldown_expires_after_window(make_orchestrator) -> None:
    clock = ManualClock()
    orch = make_orchestrator(FakeSolanaClient(balance_sol=1.0), clock=clock)
    wallet = new_address()

    assert asyncio.run(orch.claim(wallet)).ok
    clock.advance(24 * 3600 - 1)
    assert asyncio.run(orch.claim(wallet)).status == co.COOLDOWN_ACTIVE
    clock.advance(1)
    assert asyncio.run(orch.claim(wallet)).ok


def test_malformed_wallet_rejected_without_ledger_query(make_orchestrator) -> None:
    client = FakeSolanaClient()
    orch = make_orchestrator(client)
    out = asyncio.run(orch.claim("abc"))
    assert out.status == co.INVALID_WALLET
    assert client.balance_calls == 0
    assert client.transfers == []


def test_invalid_solana_address(make_orchestrator) -> None:
    client = FakeSolanaClient()
    out = asyncio.run(make_orchestrator(client).claim("0" * 44))
    assert out.status == co.INVALID_ADDRESS
    assert client.balance_calls == 0


def test_low_balance_rejects_any_claim(make_orchestrator) -> None:
    client = FakeSolanaClient(balance_sol=0.0005)
    orch = make_orchestrator(client)
    out = asyncio.run(orch.claim(new_address()))
    assert out.status == co.FAUCET_EMPTY
    assert client.transfers == []
    assert orch.stats.total_claims == 0


def test_failed_transfer_leaves_cooldown_and_stats_untouched(make_orchestrator) -> None:
    client = FakeSolanaClient(fail_with=RuntimeError("blockhash not found"))
    orch = make_orchestrator(client)
    wallet = new_address()

    out = asyncio.run(orch.claim(wallet))
    assert out.status == co.TRANSFER_FAILED
    assert orch.ledger.last_claim(wallet) is None
    assert orch.stats.total_claims == 0

    client.fail_with = None
    assert asyncio.run(orch.claim(wallet)).ok


def test_timeout_is_a_failure(make_orchestrator) -> None:
    client = FakeSolanaClient(delay=1.0)
    orch = make_orchestrator(client, confirm_timeout=0.05)
    wallet = new_address()
    assert asyncio.run(orch.claim(wallet)).status == co.TRANSFER_FAILED
    assert orch.ledger.check_eligible(wallet, orch.clock()).eligible


def test_unconfigured_faucet_refuses_claims(make_orchestrator) -> None:
    client = FakeSolanaClient()
    orch = make_orchestrator(client, faucet_account=None)
    assert not orch.enabled
    assert asyncio.run(orch.claim(new_address())).status == co.NOT_CONFIGURED
    info = asyncio.run(orch.info())
    assert info["balance"] == 0
    assert info["wallet"] == ""
    assert client.balance_calls == 0


def test_concurrent_claims_same_wallet_commit_once(make_orchestrator) -> None:
    client = FakeSolanaClient(balance_sol=1.0, delay=0.01)
    orch = make_orchestrator(client)
    wallet = new_address()

    async def _run():
        return await asyncio.gather(*[orch.claim(wallet) for _ in range(8)])

    outcomes = asyncio.run(_run())
    assert sum(1 for o in outcomes if o.ok) == 1
    assert all(o.status == co.COOLDOWN_ACTIVE for o in outcomes if not o.ok)
    assert len(client.transfers) == 1


def test_concurrent_claims_across_wallets_never_overdraw(make_orchestrator) -> None:
    client = FakeSolanaClient(balance_sol=0.035, delay=0.01)
    orch = make_orchestrator(client)
    start = client.balance_lamports

    async def _run():
        return await asyncio.gather(*[orch.claim(new_address()) for _ in range(6)])

    outcomes = asyncio.run(_run())
    committed = [o for o in outcomes if o.ok]
    dispensed = sum(lamports for _, lamports in client.transfers)

    assert len(committed) == 3
    assert all(o.status == co.FAUCET_EMPTY for o in outcomes if not o.ok)
    assert dispensed <= start - orch.fee_reserve_lamports
    assert orch.stats.total_claims == len(committed)
    assert orch.stats.total_sent_lamports == len(committed) * orch.claim_lamports


def test_info_reports_balance_and_recent_claims(make_orchestrator, account) -> None:
    client = FakeSolanaClient(balance_sol=1.0)
    orch = make_orchestrator(client)
    wallets = [new_address() for _ in range(3)]

    async def _run():
        for w in wallets:
            await orch.claim(w)
        return await orch.info(recent_limit=2)

    info = asyncio.run(_run())
    assert info["wallet"] == account.address
    assert info["balance"] == 0.97
    assert info["claimAmount"] == 0.01
    assert info["totalClaims"] == 3
    assert [c["wallet"] for c in info["recentClaims"]] == wallets[1:]
