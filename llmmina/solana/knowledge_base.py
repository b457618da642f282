"""A small keyword-scored knowledge base about the Solana blockchain."""

from dataclasses import dataclass, field


@dataclass
class Answer:
    """An answer picked from the knowledge base."""

    answer: str
    sources: list[str] = field(default_factory=list)
    topic: str = ""


@dataclass(frozen=True)
class Topic:
    """Keywords that select a topic, and the answer it gives."""

    keywords: tuple[str, ...]
    answer: str
    sources: tuple[str, ...] = ()


def _build_topics() -> dict[str, Topic]:
    return {
        "architecture": Topic(
            keywords=(
                "architecture", "design", "how does solana work", "proof of history",
                "poh", "tower bft", "gulf stream", "turbine", "sealevel", "pipeline",
                "cloudbreak", "archivers",
            ),
            answer=(
                "Solana is a high-performance Layer 1 blockchain built around eight core innovations:\n"
                "1. Proof of History (PoH) — a cryptographic clock that orders transactions before consensus.\n"
                "2. Tower BFT — a PoH-optimized PBFT variant for faster finality.\n"
                "3. Gulf Stream — mempool-less transaction forwarding to upcoming leaders.\n"
                "4. Turbine — block propagation via erasure coding and random paths.\n"
                "5. Sealevel — parallel smart contract execution.\n"
                "6. Pipelining — optimized validation pipeline (fetch, verify, bank).\n"
                "7. Cloudbreak — horizontally-scalable accounts database.\n"
                "8. Archivers — distributed ledger storage with proofs."
            ),
            sources=("Solana news: 8 innovations that make Solana a web-scale blockchain",),
        ),
        "proof_of_history": Topic(
            keywords=(
                "proof of history", "poh", "cryptographic clock",
                "verifiable delay function", "vdf", "time", "sequence",
            ),
            answer=(
                "Proof of History (PoH) is Solana's core innovation — a sequence of computations "
                "that provides a way to cryptographically verify passage of time between two events. "
                "It uses a recursive, sequential SHA-256 hash where the output of one hash is the "
                "input for the next. Because SHA-256 is deterministic and sequential, validators can "
                "verify the entire sequence in parallel rather than re-computing it. This creates a "
                "'cryptographic clock' that orders transactions before they enter consensus, "
                "dramatically reducing communication overhead in Tower BFT."
            ),
            sources=("Solana news: Proof of History explained",),
        ),
        "accounts": Topic(
            keywords=("account", "accounts", "pubkey", "address", "owner", "data", "lamport", "rent"),
            answer=(
                "Solana uses an account-based model (not UTXO). Every account has a unique public key "
                "and stores: lamports (SOL balance, 1 SOL = 10^9 lamports), owner (the program that "
                "owns it), data (arbitrary state bytes), executable (whether it's a program), and "
                "rent_epoch. Accounts must pay rent or be rent-exempt. Native SOL accounts are owned "
                "by the System Program."
            ),
            sources=("Solana docs: programming model, accounts",),
        ),
        "transactions": Topic(
            keywords=(
                "transaction", "tx", "instruction", "signature", "fee", "compute units",
                "cu", "priority fee", "jito", "mempool",
            ),
            answer=(
                "Solana transactions contain one or more instructions, each specifying a program to "
                "invoke, accounts to read/write, and instruction data. Key concepts: base fee = 5000 "
                "lamports per signature; compute units (CUs) default to 1.4M per transaction; priority "
                "fees (micro-lamports per CU) help faster inclusion; no traditional mempool (Gulf "
                "Stream forwards to leaders); Jito provides MEV auction support; transactions are atomic."
            ),
            sources=("Solana docs: programming model, transactions",),
        ),
        "programs": Topic(
            keywords=(
                "program", "smart contract", "contract", "deploy", "bpf", "ebpf", "rust",
                "anchor", "native program", "spl",
            ),
            answer=(
                "Solana programs are compiled to eBPF bytecode and stored in executable accounts. "
                "Native Programs are built into the validator (System, Stake, Vote, etc.). SPL Programs "
                "include Token, ATA, Memo, etc. Custom Programs are written in Rust/C and compiled to "
                "BPF. Anchor is a popular Rust framework. Programs are stateless; all state lives in "
                "separate data accounts. Programs are upgraded by the upgrade authority."
            ),
            sources=("Solana docs: program overview",),
        ),
        "tokens": Topic(
            keywords=(
                "token", "spl token", "spl", "mint", "associated token account", "ata",
                "metadata", "metaplex", "nft", "fungible",
            ),
            answer=(
                "Solana tokens use the SPL Token standard. Mint defines token properties (supply, "
                "decimals, freeze authority). Token Account holds balances for a specific mint and "
                "owner. Associated Token Account (ATA) is a deterministic address derived from owner + "
                "mint. Metaplex Token Metadata stores name/symbol/URI. Token-2022 adds extensions like "
                "confidential transfers and transfer fees."
            ),
            sources=("SPL docs: token program",),
        ),
        "staking": Topic(
            keywords=(
                "stake", "staking", "validator", "delegation", "epoch", "inflation",
                "reward", "vote account", "warmup", "cooldown",
            ),
            answer=(
                "Solana uses Delegated Proof of Stake (dPoS). Stake Account holds delegated SOL with an "
                "authority controlling delegation and withdrawal. Vote Account is created by validators "
                "to receive delegations. Epoch is ~2 days; delegations take effect next epoch. "
                "Warmup/cooldown: stake activates/deactivates over an epoch. Inflation target ~8% "
                "initially, decreasing 15% per year until 1.5%. Rewards distributed automatically at "
                "epoch boundaries."
            ),
            sources=("Solana docs: stake accounts",),
        ),
        "consensus": Topic(
            keywords=(
                "consensus", "tower bft", "bft", "finality", "slot", "epoch", "leader",
                "block producer", "vote", "optimistic confirmation", "rooted",
            ),
            answer=(
                "Solana uses Tower BFT, a PBFT-like consensus optimized with PoH. Slot is ~400ms; one "
                "leader per slot produces up to 4 blocks (shreds). Epoch is ~432,000 slots (~2 days). "
                "Optimistic Confirmation: >66.66% stake votes. Rooted/Finalized: >33.33% stake votes on "
                "a descendant 32+ slots deeper. Leader Schedule computed per epoch from stake "
                "distribution. Slashing is not yet implemented."
            ),
            sources=("Solana docs: cluster commitments",),
        ),
        "clusters": Topic(
            keywords=("mainnet", "devnet", "testnet", "cluster", "network", "rpc", "endpoint", "explorer"),
            answer=(
                "Solana clusters: Mainnet-Beta (production, real SOL), Devnet (test network with "
                "faucet), Testnet (validator/feature testing). Custom RPCs: QuickNode, Alchemy, Helius, "
                "Ankr. Explorers: Solscan, SolanaFM, Explorer.solana.com."
            ),
            sources=("Solana docs: cluster RPC endpoints",),
        ),
        "security": Topic(
            keywords=(
                "security", "hack", "exploit", "reentrancy", "account validation",
                "ownership check", "signer check", "arbitrary cpi", "type confusion",
            ),
            answer=(
                "Common Solana vulnerabilities: Missing Signer Check; Missing Ownership Check; Account "
                "Confusion/Validation; Reentrancy via CPI; Arithmetic Overflow; Arbitrary CPI; PDA "
                "closure issues. Best practice: Use Anchor constraints and practice with "
                "sealevel-attacker/CTF challenges."
            ),
            sources=("Solana docs: program security",),
        ),
        "program_derived_address": Topic(
            keywords=(
                "pda", "program derived address", "program derived account", "bump", "seed",
                "find_program_address", "create_program_address",
            ),
            answer=(
                "Program Derived Addresses (PDAs) are deterministically derived from a program ID and "
                "seeds. They have no private key; only the owning program can sign via CPI. "
                "find_program_address iterates a bump seed (0-255) until a valid off-curve address is "
                "found. create_program_address computes directly if bump is known. Use cases: escrow, "
                "vaults, user data, authorities."
            ),
            sources=("Solana docs: calling between programs, program derived addresses",),
        ),
        "compression": Topic(
            keywords=(
                "compression", "state compression", "compressed nft", "cnft",
                "merkle tree", "bubblegum", "light",
            ),
            answer=(
                "State Compression (compressed NFTs / cNFTs) uses concurrent Merkle trees to store data "
                "off-chain while anchoring a small Merkle root on-chain. Bubblegum (Metaplex) is the "
                "primary program. Cost: ~0.0001 SOL per cNFT vs ~0.012 SOL uncompressed. RPC providers "
                "must index the tree to serve proofs."
            ),
            sources=("Solana docs: state compression",),
        ),
        "fees": Topic(
            keywords=(
                "fee", "gas", "priority fee", "compute budget", "cu", "cost", "cheap",
                "expensive", "rent",
            ),
            answer=(
                "Solana fee structure: base transaction fee = 5000 lamports per signature (0.000005 "
                "SOL). Priority Fee = optional micro-lamports per CU. Compute Budget = default 1.4M CUs "
                "per transaction. Rent = minimum balance to persist accounts. Simple transfer: "
                "~0.000005 SOL. Complex DeFi swap: ~0.00002-0.001 SOL depending on priority fees."
            ),
            sources=("Solana docs: transaction fees",),
        ),
    }


class SolanaKnowledgeBase:
    """Answers questions by matching keywords against a fixed set of topics."""

    def __init__(self) -> None:
        self._topics = _build_topics()

    def ask(self, question: str) -> Answer | None:
        """Best topic by total length of matched keywords, or None if nothing matches."""
        text = question.lower()
        best_name: str | None = None
        best_score = 0
        for name, topic in self._topics.items():
            score = sum(len(keyword) for keyword in topic.keywords if keyword in text)
            if score > best_score:
                best_name, best_score = name, score
        if best_name is None:
            return None
        topic = self._topics[best_name]
        return Answer(answer=topic.answer, sources=list(topic.sources), topic=best_name)

    def list_topics(self) -> list[str]:
        return list(self._topics)

    def get_topic(self, name: str) -> Topic | None:
        return self._topics.get(name)