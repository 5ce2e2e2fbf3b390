from crckit.algorithm.params import ByteOrder
from crckit.engine.checksum import ChecksumEngine


if __name__ == "__main__":
    # CRC-32/ISO-HDLC (zlib, Ethernet, PNG)
    engine = ChecksumEngine.create(
        width=32,
        polynomial=0x04C11DB7,
        init=0xFFFFFFFF,
        reflect_input=True,
        reflect_output=True,
        xor_output=0xFFFFFFFF,
        byte_order=ByteOrder.LITTLE,
    )

    print(f"check   = 0x{engine.check_value():08x}")   # 0xcbf43926
    print(f"residue = 0x{engine.algorithm.residue:08x}")  # 0xdebb20e3

    message = b"The quick brown fox jumps over the lazy dog"
    fcs = engine.checksum_as_bytes(message)
    print(f"fcs     = {fcs.hex()}")

    # streamed in chunks, same answer
    engine.initialize()
    for i in range(0, len(message), 7):
        engine.update(message[i:i + 7])
    assert engine.current_checksum_bytes() == fcs

    codeword = message + fcs
    print(f"verify(clean)     = {engine.verify_message(codeword)}")
    corrupted = bytearray(codeword)
    corrupted[3] ^= 0x10
    print(f"verify(corrupted) = {engine.verify_message(bytes(corrupted))}")
