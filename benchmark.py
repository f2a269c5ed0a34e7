import time
import numpy as np
from magma import encrypt, decrypt, prepare_key, generate_key
from magma.params import bcolors

def benchmark_buffer(n_blocks, repeat=5):
    print(f"{bcolors.OKBLUE}Benchmarking {n_blocks} block(s) ({n_blocks * 8} bytes){bcolors.ENDC}")

    key = prepare_key(generate_key()).unwrap()
    rng = np.random.default_rng()
    data = rng.integers(0, 256, size=n_blocks * 8, dtype=np.uint8).tobytes()

    total_time_encrypt = 0.0
    total_time_decrypt = 0.0
    success = True

    for _ in range(repeat):
        start = time.perf_counter()
        encrypted = encrypt(data, key).unwrap()
        end = time.perf_counter()
        total_time_encrypt += end - start

        start = time.perf_counter()
        decrypted = decrypt(encrypted, key).unwrap()
        end = time.perf_counter()
        total_time_decrypt += end - start

        if decrypted != data:
            print(f"{bcolors.FAIL}Buffer recovery failed in repeat!{bcolors.ENDC}")
            success = False

    enc_avg = total_time_encrypt / repeat
    dec_avg = total_time_decrypt / repeat
    print(f"Average encryption time: {enc_avg:.6f}s ({len(data) / enc_avg / 1024:.1f} KiB/s)")
    print(f"Average decryption time: {dec_avg:.6f}s ({len(data) / dec_avg / 1024:.1f} KiB/s)")
    print(f"{bcolors.OKGREEN if success else bcolors.FAIL}Success: {success}{bcolors.ENDC}")
    print("-" * 60)

def run_benchmarks():
    for n_blocks in (1, 128, 8192):
        benchmark_buffer(n_blocks, repeat=3)

if __name__ == "__main__":
    run_benchmarks()
