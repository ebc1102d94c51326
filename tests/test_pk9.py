import logging

import pytest

from pkx import (
    AbilityNumber, CodecConfig, Gender, HiddenPower, Language, Nature,
    PK9, RecordSizeError, Stats,
)
from vectors import TEST_EKX, TEST_PKX

DITTO     = 132
IMPOSTER  = 150
TRANSFORM = 144
DESTINY_KNOT = 280


@pytest.fixture
def pk9() -> PK9:
    return PK9.new(TEST_EKX)


class TestCipher:

    def test_is_encrypted(self):
        assert PK9.is_encrypted(TEST_EKX) is True
        assert PK9.is_encrypted(TEST_PKX) is False

    def test_decrypt(self):
        assert PK9.decrypt(TEST_EKX) == TEST_PKX

    def test_encrypt(self):
        assert PK9.encrypt(TEST_PKX) == TEST_EKX

    def test_get_encrypted(self):
        assert PK9(TEST_PKX).get_encrypted() == TEST_EKX

    def test_new_decrypts_obfuscated_input(self, pk9):
        assert pk9.data == TEST_PKX
        assert bytes(pk9) == TEST_PKX

    def test_new_keeps_clear_input(self):
        assert PK9.new(TEST_PKX).data == TEST_PKX

    def test_stored_size(self):
        assert PK9.STORED_SIZE == 328
        assert PK9.BLOCK_SIZE == 80
        assert len(TEST_PKX) == PK9.STORED_SIZE


class TestFields:

    def test_identity(self, pk9):
        assert pk9.encryption_constant == 0xF8D56EFE
        assert pk9.species == DITTO
        assert pk9.held_item == DESTINY_KNOT
        assert pk9.pid == 0xCB1299C8
        assert pk9.tid == 44421
        assert pk9.sid == 34619
        assert pk9.exp == 421875

    def test_shiny_values(self, pk9):
        assert pk9.tsv == 683
        assert pk9.psv == 1325
        assert pk9.is_shiny is False

    def test_nature(self, pk9):
        assert pk9.nature is Nature.SASSY
        assert pk9.minted_nature is Nature.SASSY

    def test_ability(self, pk9):
        assert pk9.ability == IMPOSTER
        assert pk9.ability_number is AbilityNumber.HIDDEN

    def test_gender_and_language(self, pk9):
        assert pk9.gender is Gender.GENDERLESS
        assert pk9.language is Language.ENGLISH

    def test_moves(self, pk9):
        assert pk9.move1 == TRANSFORM
        assert pk9.move2 == 0
        assert pk9.move3 == 0
        assert pk9.move4 == 0
        assert pk9.moves == (TRANSFORM, 0, 0, 0)
        assert pk9.move_pp == (10, 0, 0, 0)

    def test_ivs(self, pk9):
        assert pk9.iv32 == 0x3FFFFFFF
        assert pk9.ivs == Stats(hp=31, attack=31, defense=31, special_attack=31,
                                special_defense=31, speed=31)

    def test_evs(self, pk9):
        assert pk9.evs == Stats()
        assert pk9.evs.total == 0

    def test_hidden_power(self, pk9):
        assert pk9.hidden_power_num == 15
        assert pk9.hidden_power is HiddenPower.DARK

    def test_flags(self, pk9):
        assert pk9.is_egg is False
        assert pk9.is_nicknamed is False

    def test_names(self, pk9):
        assert pk9.nickname == "Métamorph"
        assert pk9.ot_name == "Abyzab"
        assert pk9.ht_name == "Sakura"

    def test_friendship(self, pk9):
        assert pk9.ot_friendship == 50
        assert pk9.ht_friendship == 50
        assert pk9.current_handler == 1
        assert pk9.current_friendship == 50

    def test_checksum(self, pk9):
        assert pk9.sanity == 0
        assert pk9.checksum == 0x61EF
        assert pk9.calculate_checksum() == 0x61EF
        assert pk9.is_valid is True

    def test_to_dict(self, pk9):
        d = pk9.to_dict()
        assert d['format'] == 'pk9'
        assert d['species'] == DITTO
        assert d['nature'] == 'sassy'
        assert d['ability_number'] == 'hidden'
        assert d['hidden_power'] == 'dark'
        assert d['ivs']['speed'] == 31
        assert d['moves'] == [TRANSFORM, 0, 0, 0]
        assert d['is_valid'] is True


class TestDefaultRecord:

    def test_all_zero(self):
        pk9 = PK9()
        assert pk9.data == bytes(328)
        assert pk9.is_empty is True

    def test_not_shiny(self):
        pk9 = PK9()
        assert pk9.tsv == pk9.psv == 0
        assert pk9.is_shiny is False

    def test_fields_read_as_zero(self):
        pk9 = PK9()
        assert pk9.species == 0
        assert pk9.nickname == ""
        assert pk9.ability_number is AbilityNumber.INVALID
        assert pk9.language is Language.INVALID
        assert pk9.hidden_power is HiddenPower.FIGHTING

    def test_genuine_record_is_not_empty(self, pk9):
        assert pk9.is_empty is False


class TestConstruction:

    def test_wrong_size_raises(self):
        with pytest.raises(RecordSizeError):
            PK9(TEST_PKX[:-1])
        with pytest.raises(ValueError):
            PK9.new(TEST_PKX + b'\x00')

    def test_new_or_default_substitutes_empty_record(self, caplog):
        with caplog.at_level(logging.WARNING, logger='pkx'):
            pk9 = PK9.new_or_default(TEST_EKX[:100])
        assert pk9.is_empty
        assert pk9 == PK9()
        assert "using empty record" in caplog.text

    def test_new_or_default_strict(self, monkeypatch):
        monkeypatch.setattr(CodecConfig, 'STRICT_SIZE', True)
        with pytest.raises(RecordSizeError):
            PK9.new_or_default(TEST_EKX[:100])

    def test_new_or_default_decrypts(self):
        assert PK9.new_or_default(TEST_EKX).data == TEST_PKX

    def test_equality(self):
        assert PK9(TEST_PKX) == PK9.new(TEST_EKX)
        assert PK9(TEST_PKX) != PK9()
        assert len({PK9(TEST_PKX), PK9.new(TEST_EKX)}) == 1


class TestCorruptRecord:

    @pytest.fixture
    def corrupt(self) -> PK9:
        data = bytearray(TEST_PKX)
        data[0x26] = 252    # HP EVs, without updating the checksum
        return PK9(bytes(data))

    def test_is_invalid_but_readable(self, corrupt):
        assert corrupt.is_valid is False
        assert corrupt.species == DITTO
        assert corrupt.evs.hp == 252

    def test_refresh_checksum(self, corrupt):
        fixed = corrupt.refresh_checksum()
        assert fixed.is_valid is True
        assert fixed.checksum == fixed.calculate_checksum()
        assert corrupt.is_valid is False

    def test_nonzero_sanity_is_invalid(self):
        data = bytearray(TEST_PKX)
        data[0x04] = 1
        assert PK9(bytes(data)).is_valid is False

    def test_round_trip_survives_edit(self, corrupt):
        fixed = corrupt.refresh_checksum()
        assert PK9.new(fixed.get_encrypted()) == fixed
