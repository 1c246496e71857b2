"""
Tests for wallet creation, import and derivation paths.

The extended key test derives the BIP32 master key of a mnemonic with
bip_utils and checks it lands on the same wallet as the mnemonic import,
so both derivation routes are tied to the same path string.
"""
import pytest
from bip_utils import Bip32Slip10Secp256k1, Bip39SeedGenerator
from tronpy.keys import to_base58check_address

from tron_wallet import (
    create_wallet,
    get_derivation_path,
    import_wallet,
    import_wallet_from_extended_key,
    import_wallet_from_mnemonic,
    to_hex_address,
    validate_address,
)

MNEMONIC = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"


def master_extended_key(mnemonic: str) -> str:
    seed = Bip39SeedGenerator(mnemonic).Generate()
    return Bip32Slip10Secp256k1.FromSeed(seed).PrivateKey().ToExtended()


class TestDerivationPath:
    
    def test_path_template(self) -> None:
        assert get_derivation_path(0) == "m/49'/194'/0'/0/0"
        assert get_derivation_path(17) == "m/49'/194'/0'/0/17"
    
    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError):
            get_derivation_path(-1)


class TestMnemonicImport:
    
    def test_deterministic(self) -> None:
        """The same mnemonic and index always give the same wallet."""
        assert import_wallet_from_mnemonic(MNEMONIC, 0) == import_wallet_from_mnemonic(MNEMONIC, 0)
    
    def test_wallet_shape(self) -> None:
        wallet = import_wallet_from_mnemonic(MNEMONIC, 0)
        assert wallet["address"].startswith("T")
        assert len(wallet["address"]) == 34
        assert validate_address(wallet["address"]) == wallet["address"]
        assert len(wallet["private_key"]) == 64
        int(wallet["private_key"], 16)
    
    def test_indices_give_distinct_wallets(self) -> None:
        addresses = {import_wallet_from_mnemonic(MNEMONIC, i)["address"] for i in range(3)}
        assert len(addresses) == 3
    
    def test_invalid_mnemonic(self) -> None:
        with pytest.raises(ValueError, match="Invalid mnemonic"):
            import_wallet_from_mnemonic("abandon " * 11 + "abandon", 0)


class TestExtendedKeyImport:
    
    @pytest.mark.parametrize("index", [0, 1, 5])
    def test_matches_mnemonic_derivation(self, index: int) -> None:
        """xprv of the mnemonic's seed and the mnemonic itself derive the same account."""
        xprv = master_extended_key(MNEMONIC)
        assert import_wallet_from_extended_key(xprv, index) == import_wallet_from_mnemonic(MNEMONIC, index)
    
    def test_invalid_extended_key(self) -> None:
        with pytest.raises(ValueError):
            import_wallet_from_extended_key("xprv-not-a-key", 0)
    
    def test_public_extended_key_rejected(self) -> None:
        seed = Bip39SeedGenerator(MNEMONIC).Generate()
        xpub = Bip32Slip10Secp256k1.FromSeed(seed).PublicKey().ToExtended()
        with pytest.raises(ValueError):
            import_wallet_from_extended_key(xpub, 0)


class TestPrivateKeyImport:
    
    def test_round_trip_with_derived_key(self) -> None:
        derived = import_wallet_from_mnemonic(MNEMONIC, 2)
        assert import_wallet(derived["private_key"]) == derived
    
    def test_0x_prefix_is_accepted_and_stripped(self) -> None:
        derived = import_wallet_from_mnemonic(MNEMONIC, 0)
        assert import_wallet("0x" + derived["private_key"]) == derived
    
    @pytest.mark.parametrize("bad", ["", "zz" * 32, "ab" * 31])
    def test_invalid_private_key(self, bad: str) -> None:
        with pytest.raises(ValueError):
            import_wallet(bad)


class TestCreateWallet:
    
    def test_new_wallets_are_valid_and_unique(self) -> None:
        first = create_wallet()
        second = create_wallet()
        assert validate_address(first["address"])
        assert first["address"] != second["address"]
        assert import_wallet(first["private_key"]) == first


class TestAddressUtils:
    
    def test_to_hex_address(self) -> None:
        address = import_wallet_from_mnemonic(MNEMONIC, 0)["address"]
        hex_address = to_hex_address(address)
        assert hex_address.startswith("41")
        assert len(hex_address) == 42
        assert to_base58check_address(hex_address) == address
    
    @pytest.mark.parametrize("bad", ["", "T123", "0x1234567890123456789012345678901234567890"])
    def test_validate_address_rejects(self, bad: str) -> None:
        with pytest.raises(ValueError):
            validate_address(bad)
