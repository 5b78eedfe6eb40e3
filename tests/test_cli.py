import json
from dataclasses import replace
from blockseal import Verifier
from blockseal.cli import main, EXIT_OK, EXIT_TAMPERED, EXIT_ERROR

KEY = "cli-key"

def write_chain(tmp_path, blocks):
    p = tmp_path / "chain.json"
    p.write_text(json.dumps([b.to_dict() for b in blocks]), encoding="utf-8")
    return str(p)

def test_sign_outputs_verifiable_block(capsys):
    assert main(["sign", "-d", "hello", "-k", KEY]) == EXIT_OK
    block = json.loads(capsys.readouterr().out)
    assert block["data"] == "hello"
    assert Verifier(KEY).verify_data("hello", block["signature"])

def test_verify_exit_codes(capsys):
    sig = Verifier(KEY).sign_data("hello")
    assert main(["verify", "-d", "hello", "-s", sig, "-k", KEY]) == EXIT_OK
    assert main(["verify", "-d", "hellO", "-s", sig, "-k", KEY]) == EXIT_TAMPERED
    assert main(["verify", "-d", "hello", "-s", "bad!", "-k", KEY]) == EXIT_ERROR

def test_key_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("BLOCKSEAL_SECRET_KEY", KEY)
    sig = Verifier(KEY).sign_data("hello")
    assert main(["verify", "-d", "hello", "-s", sig]) == EXIT_OK

def test_missing_key_is_error(monkeypatch, capsys):
    monkeypatch.delenv("BLOCKSEAL_SECRET_KEY", raising=False)
    assert main(["sign", "-d", "hello"]) == EXIT_ERROR
    assert "Invalid secret key" in capsys.readouterr().err

def test_empty_key_flag_is_rejected(monkeypatch, capsys):
    monkeypatch.setenv("BLOCKSEAL_SECRET_KEY", KEY)
    assert main(["sign", "-d", "hello", "-k", ""]) == EXIT_ERROR
    assert "Invalid secret key" in capsys.readouterr().err

def test_hash(tmp_path, capsys):
    block = Verifier(KEY).create_block("hello")
    p = tmp_path / "block.json"
    p.write_text(json.dumps(block.to_dict()), encoding="utf-8")
    assert main(["hash", "-f", str(p)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == f"block_hash: {Verifier.hash_block(block)}"

def test_inspect_intact_chain(tmp_path, capsys):
    v = Verifier(KEY)
    path = write_chain(tmp_path, [v.create_block(f"data{i}") for i in range(1, 4)])
    assert main(["inspect", "-f", path, "-k", KEY, "--json"]) == EXIT_OK
    out = json.loads(capsys.readouterr().out)
    assert [i["status"] for i in out["information"]] == ["Recovered", "Valid", "Valid"]
    assert out["summary"]["tampered"] == 0

def test_inspect_tampered_chain(tmp_path, capsys):
    v = Verifier(KEY)
    chain = [v.create_block(f"data{i}") for i in range(1, 4)]
    chain[2] = replace(chain[2], data="tampered3")
    path = write_chain(tmp_path, chain)
    assert main(["inspect", "-f", path, "-k", KEY, "-w", "2"]) == EXIT_TAMPERED
    out = capsys.readouterr().out
    assert "Tampered  tampered3" in out

def test_inspect_malformed_strict_and_lenient(tmp_path, capsys):
    v = Verifier(KEY)
    chain = [v.create_block("data1")]
    chain.append(replace(v.create_block("data2"), signature="AAAA"))
    path = write_chain(tmp_path, chain)
    assert main(["inspect", "-f", path, "-k", KEY]) == EXIT_ERROR
    assert main(["inspect", "-f", path, "-k", KEY, "--lenient"]) == EXIT_TAMPERED

def test_inspect_bad_files(tmp_path, capsys):
    assert main(["inspect", "-f", str(tmp_path / "missing.json"), "-k", KEY]) == EXIT_ERROR
    p = tmp_path / "obj.json"
    p.write_text('{"data": "x"}', encoding="utf-8")
    assert main(["inspect", "-f", str(p), "-k", KEY]) == EXIT_ERROR
    p.write_text("not json", encoding="utf-8")
    assert main(["inspect", "-f", str(p), "-k", KEY]) == EXIT_ERROR

def test_demo(capsys):
    assert main(["demo"]) == EXIT_OK
    assert "Demonstration complete." in capsys.readouterr().out

def test_no_command(capsys):
    assert main([]) == EXIT_ERROR
