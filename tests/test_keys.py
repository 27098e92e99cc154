import unittest

from pgp_encrypt.engine import PGPyEngine
from pgp_encrypt.errors import EncryptionFailure, KeyLoadError
from pgp_encrypt.keys import RecipientKey, load_recipient_key
from tests.test_support import (
    FakeEngine,
    recipient_private_key,
    sign_only_private_key,
    temp_directory,
    write_public_key,
)


class TestLoadRecipientKey(unittest.TestCase):
    def test_armored_public_key(self) -> None:
        with temp_directory() as tmp:
            path = write_public_key(tmp / "alice.asc")
            key = load_recipient_key(path)

        self.assertIsInstance(key, RecipientKey)
        self.assertEqual(key.path, path)
        self.assertEqual(key.fingerprint, str(recipient_private_key().fingerprint))
        self.assertTrue(key.handle.is_public)

    def test_binary_public_key(self) -> None:
        with temp_directory() as tmp:
            path = write_public_key(tmp / "alice.gpg", armored=False)
            key = load_recipient_key(path)
        self.assertEqual(key.fingerprint, str(recipient_private_key().fingerprint))

    def test_secret_key_file_keeps_public_half(self) -> None:
        with temp_directory() as tmp:
            path = tmp / "secret.asc"
            path.write_text(str(recipient_private_key()), encoding="ascii")
            key = load_recipient_key(path)
        self.assertTrue(key.handle.is_public)

    def test_missing_file(self) -> None:
        with temp_directory() as tmp:
            with self.assertRaises(KeyLoadError) as ctx:
                load_recipient_key(tmp / "missing.asc")
        self.assertIn("not found", str(ctx.exception))

    def test_directory_instead_of_file(self) -> None:
        with temp_directory() as tmp:
            with self.assertRaises(KeyLoadError):
                load_recipient_key(tmp)

    def test_invalid_material(self) -> None:
        cases = {
            "empty.asc": b"",
            "text.asc": b"this is not a key\n",
            "binary.gpg": bytes(range(256)) * 4,
        }
        with temp_directory() as tmp:
            for name, content in cases.items():
                with self.subTest(name=name):
                    path = tmp / name
                    path.write_bytes(content)
                    with self.assertRaises(KeyLoadError) as ctx:
                        load_recipient_key(path)
                    self.assertEqual(ctx.exception.path, path)

    def test_key_without_encryption_capability(self) -> None:
        with temp_directory() as tmp:
            path = write_public_key(tmp / "signer.asc", sign_only_private_key())
            with self.assertRaises(KeyLoadError) as ctx:
                load_recipient_key(path)
        self.assertIn("No valid encryption key", str(ctx.exception))

    def test_custom_engine_is_probed(self) -> None:
        with temp_directory() as tmp:
            path = tmp / "fake.key"
            path.write_bytes(b"anything")
            engine = FakeEngine()
            key = load_recipient_key(path, engine)
        self.assertEqual(key.handle, "fake-key")
        self.assertEqual(key.fingerprint, "FAKE0000")
        self.assertEqual(len(engine.calls), 1)


class TestPGPyEngine(unittest.TestCase):
    def test_encrypt_produces_decryptable_binary_message(self) -> None:
        from pgpy import PGPMessage

        engine = PGPyEngine()
        handle = recipient_private_key().pubkey
        ciphertext = engine.encrypt(handle, b"payload")

        self.assertNotIn(b"payload", ciphertext)
        message = PGPMessage.from_blob(ciphertext)
        self.assertTrue(message.is_encrypted)
        self.assertEqual(bytes(recipient_private_key().decrypt(message).message), b"payload")

    def test_armored_output(self) -> None:
        engine = PGPyEngine()
        ciphertext = engine.encrypt(recipient_private_key().pubkey, b"payload", armor=True)
        self.assertTrue(ciphertext.startswith(b"-----BEGIN PGP MESSAGE-----"))

    def test_encrypt_failure_is_classified(self) -> None:
        engine = PGPyEngine()
        with self.assertRaises(EncryptionFailure):
            engine.encrypt(sign_only_private_key().pubkey, b"payload")


if __name__ == "__main__":
    unittest.main()
