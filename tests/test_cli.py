"""End-to-end tests for the merkle-whitelist command line."""

import json

import pytest

from merkle_whitelist.cli import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
    read_address_file,
)

from conftest import CONTRACT_A, NOT_LISTED, USER1, USER2, USER3, USER4, FakeContract, FakeWeb3


@pytest.fixture(autouse=True)
def no_rpc(monkeypatch):
    monkeypatch.delenv("WHITELIST_RPC_URL", raising=False)
    monkeypatch.delenv("INFURA_KEY", raising=False)


class TestGenerate:

    def test_prints_root_and_proofs(self, capsys):
        assert main(["generate", USER1, USER2, USER3]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Merkle Root: 0x" in out
        assert out.count("is whitelisted: True") == 3

    def test_json_output(self, capsys):
        assert main(["generate", USER1, USER2, "--json"]) == EXIT_SUCCESS
        doc = json.loads(capsys.readouterr().out)
        assert set(doc["proofs"]) == {USER1.lower(), USER2.lower()}
        assert doc["root"].startswith("0x")

    def test_solidity_output(self, capsys):
        assert main(["generate", USER1, USER2, "--solidity"]) == EXIT_SUCCESS
        assert "new bytes32[](1);" in capsys.readouterr().out

    def test_reads_file(self, tmp_path, capsys):
        path = tmp_path / "whitelist.txt"
        path.write_text(f"{USER1}\n{USER2}\n\n")
        assert main(["generate", "--file", str(path), "--json"]) == EXIT_SUCCESS
        assert len(json.loads(capsys.readouterr().out)["proofs"]) == 2

    def test_invalid_address_fails(self):
        assert main(["generate", USER1, "0xAAA"]) == EXIT_RUNTIME_ERROR

    def test_empty_whitelist_fails(self):
        assert main(["generate"]) == EXIT_RUNTIME_ERROR

    def test_contract_without_rpc_fails(self):
        assert main(["generate", "--contract", "0x" + "aa" * 20 + ":10"]) == EXIT_RUNTIME_ERROR

    def test_out_before_addresses(self, tmp_path, capsys):
        code = main(["generate", "--out", str(tmp_path), USER1, USER2, "--json"])
        assert code == EXIT_SUCCESS
        assert set(json.loads(capsys.readouterr().out)["proofs"]) == {USER1.lower(), USER2.lower()}
        assert set(json.loads((tmp_path / "proofs.json").read_text())) == {USER1.lower(), USER2.lower()}

    def test_save_uses_output_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WHITELIST_OUTPUT_DIR", str(tmp_path / "artifacts"))
        assert main(["generate", USER1, USER2, "--save"]) == EXIT_SUCCESS
        assert (tmp_path / "artifacts" / "root.json").exists()
        assert (tmp_path / "artifacts" / "proofs.json").exists()


class TestGenerateFromContract:

    @pytest.fixture
    def rpc_urls(self, monkeypatch):
        urls = []

        def fake_connect(url):
            urls.append(url)
            return FakeWeb3({CONTRACT_A: FakeContract(CONTRACT_A, {1: USER2, 2: USER3})})

        monkeypatch.setattr("merkle_whitelist.cli.connect", fake_connect)
        return urls

    def test_owners_join_seed_addresses(self, rpc_urls, capsys):
        code = main([
            "generate", USER1, "--contract", f"{CONTRACT_A}:3",
            "--rpc-url", "http://localhost:8545", "--json",
        ])
        assert code == EXIT_SUCCESS
        assert rpc_urls == ["http://localhost:8545"]
        proofs = json.loads(capsys.readouterr().out)["proofs"]
        assert set(proofs) == {USER1.lower(), USER2.lower(), USER3.lower()}

    def test_failed_owner_lookup_fails(self, rpc_urls):
        code = main(["generate", "--contract", f"{CONTRACT_A}:4", "--rpc-url", "http://localhost:8545"])
        assert code == EXIT_RUNTIME_ERROR

    def test_skip_missing_passed_through(self, rpc_urls, capsys):
        code = main([
            "generate", "--contract", f"{CONTRACT_A}:4",
            "--rpc-url", "http://localhost:8545", "--skip-missing", "--json",
        ])
        assert code == EXIT_SUCCESS
        assert set(json.loads(capsys.readouterr().out)["proofs"]) == {USER2.lower(), USER3.lower()}


class TestVerify:

    @pytest.fixture
    def out_dir(self, tmp_path):
        assert main(["generate", USER1, USER2, USER3, "--out", str(tmp_path)]) == EXIT_SUCCESS
        return tmp_path

    def test_member_verifies(self, out_dir):
        code = main([
            "verify", USER2,
            "--root", str(out_dir / "root.json"),
            "--proofs", str(out_dir / "proofs.json"),
        ])
        assert code == EXIT_SUCCESS

    def test_root_as_hex(self, out_dir):
        root = json.loads((out_dir / "root.json").read_text())
        code = main(["verify", USER1, "--root", root, "--proofs", str(out_dir / "proofs.json")])
        assert code == EXIT_SUCCESS

    def test_outsider_fails(self, out_dir):
        code = main([
            "verify", NOT_LISTED,
            "--root", str(out_dir / "root.json"),
            "--proofs", str(out_dir / "proofs.json"),
        ])
        assert code == EXIT_VERIFICATION_FAILED

    def test_wrong_root_fails(self, out_dir):
        code = main(["verify", USER1, "--root", "0x" + "00" * 32, "--proofs", str(out_dir / "proofs.json")])
        assert code == EXIT_VERIFICATION_FAILED

    def test_missing_proofs_file(self, out_dir):
        code = main(["verify", USER1, "--root", str(out_dir / "root.json"), "--proofs", str(out_dir / "nope.json")])
        assert code == EXIT_RUNTIME_ERROR


class TestReadAddressFile:

    def test_comma_separated(self, tmp_path):
        path = tmp_path / "list.csv"
        path.write_text(f"{USER1}, {USER2},\n")
        assert read_address_file(str(path)) == [USER1, USER2]

    def test_several_columns_per_line(self, tmp_path):
        path = tmp_path / "list.csv"
        path.write_text(f"{USER1},{USER2}\n{USER3},{USER4}\n")
        assert read_address_file(str(path)) == [USER1, USER2, USER3, USER4]

    def test_one_per_line(self, tmp_path):
        path = tmp_path / "list.txt"
        path.write_text(f"{USER1}\n\n  {USER2}\r\n")
        assert read_address_file(str(path)) == [USER1, USER2]


class TestLoadConfig:

    def test_infura_key_builds_rpc_url(self, monkeypatch):
        from merkle_whitelist.config import load_config

        monkeypatch.setenv("INFURA_KEY", "abc123")
        assert load_config().rpc_url == "https://mainnet.infura.io/v3/abc123"

    def test_explicit_rpc_url_wins(self, monkeypatch):
        from merkle_whitelist.config import load_config

        monkeypatch.setenv("INFURA_KEY", "abc123")
        monkeypatch.setenv("WHITELIST_RPC_URL", "http://localhost:8545")
        monkeypatch.setenv("WHITELIST_LOG_LEVEL", "DEBUG")
        config = load_config()
        assert config.rpc_url == "http://localhost:8545"
        assert config.log_level == "DEBUG"
