"""
Bundled company knowledge base.

Organized by topic sections for keyword retrieval. Each entry is a logical
topic unit; the company name is injected when the corpus is built.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import get_settings
from .loader import ensure_unique_ids, load_chunks
from .models import Category, KnowledgeChunk

_log = logging.getLogger(__name__)

# Content templates use "{company_name}" as the only placeholder.
_SAMPLE_CORPUS: Tuple[Dict[str, object], ...] = (
    {
        "id": "services-overview",
        "title": "Services Offered",
        "category": Category.SERVICES,
        "content": (
            "{company_name} provides the following services:\n"
            "- Custom website development\n"
            "- Web application development\n"
            "- SaaS MVP development\n"
            "- AI-powered chatbot integration\n"
            "- Internal business tools\n"
            "- API development and integration\n"
            "- Maintenance and technical support\n"
            "- UI/UX implementation from design files\n\n"
            "We work primarily with modern web technologies such as JavaScript, "
            "React, Node.js, and cloud-based solutions."
        ),
        "keywords": [
            "services", "website", "web", "application", "saas", "mvp", "chatbot", "ai",
            "tools", "api", "maintenance", "support", "ui", "ux", "design", "javascript",
            "react", "node", "cloud", "development", "build", "create", "offer", "provide",
            "what", "do", "you",
        ],
    },
    {
        "id": "support-hours",
        "title": "Customer Support Hours",
        "category": Category.SUPPORT,
        "content": (
            "Our customer support team is available:\n"
            "- Monday to Friday\n"
            "- From 9:00 AM to 6:00 PM (UTC)\n\n"
            "Support requests submitted outside business hours are processed the "
            "next business day."
        ),
        "keywords": [
            "support", "hours", "time", "available", "availability", "monday", "friday",
            "business", "contact", "when", "open", "schedule", "utc", "customer", "help",
            "reach", "working",
        ],
    },
    {
        "id": "pricing-billing",
        "title": "Pricing & Billing",
        "category": Category.PRICING,
        "content": (
            "{company_name} offers flexible pricing models depending on the project:\n"
            "- Fixed-price projects for clearly defined scopes\n"
            "- Hourly billing for ongoing or evolving projects\n"
            "- Monthly maintenance plans for long-term clients\n\n"
            "Invoices are issued at the beginning or end of each billing cycle, "
            "depending on the agreement. Payments are accepted via bank transfer or "
            "online payment platforms."
        ),
        "keywords": [
            "pricing", "price", "cost", "billing", "invoice", "payment", "pay", "fixed",
            "hourly", "monthly", "rate", "charge", "fee", "money", "budget", "quote",
            "estimate", "bank", "transfer", "how", "much",
        ],
    },
    {
        "id": "project-process",
        "title": "Project Process & Workflow",
        "category": Category.PROCESS,
        "content": (
            "Our typical project workflow includes:\n"
            "1. Initial consultation and requirement gathering\n"
            "2. Proposal and timeline approval\n"
            "3. Design and development phase\n"
            "4. Testing and quality assurance\n"
            "5. Deployment and delivery\n"
            "6. Post-launch support and maintenance\n\n"
            "Clients are kept informed throughout the project with regular updates."
        ),
        "keywords": [
            "project", "process", "workflow", "steps", "phases", "consultation",
            "requirements", "proposal", "timeline", "design", "development", "testing",
            "qa", "quality", "deployment", "delivery", "launch", "updates", "how", "work",
            "start", "begin", "stages",
        ],
    },
    {
        "id": "technical-support",
        "title": "Technical Support & Maintenance",
        "category": Category.SUPPORT,
        "content": (
            "We provide ongoing technical support after project delivery. This includes:\n"
            "- Bug fixes\n"
            "- Security updates\n"
            "- Performance improvements\n"
            "- Minor feature enhancements\n\n"
            "Maintenance plans are available on a monthly basis and can be customized "
            "to client needs."
        ),
        "keywords": [
            "technical", "support", "maintenance", "bug", "fix", "security", "update",
            "performance", "enhancement", "monthly", "plan", "ongoing", "after",
            "delivery", "help", "issue", "problem", "error",
        ],
    },
    {
        "id": "ai-chatbot-services",
        "title": "AI Chatbot Services",
        "category": Category.SERVICES,
        "content": (
            "{company_name} offers AI-powered chatbot solutions that help businesses:\n"
            "- Answer customer questions automatically\n"
            "- Reduce support workload\n"
            "- Provide 24/7 assistance\n"
            "- Improve response time and customer satisfaction\n\n"
            "Our chatbots can be trained on company-specific documents such as FAQs, "
            "policies, and internal documentation."
        ),
        "keywords": [
            "ai", "chatbot", "bot", "artificial", "intelligence", "automation",
            "automatic", "24/7", "questions", "answers", "support", "customer", "train",
            "training", "documents", "faq", "assistant",
        ],
    },
    {
        "id": "data-privacy-security",
        "title": "Data Privacy & Security",
        "category": Category.SECURITY,
        "content": (
            "We take data privacy seriously.\n"
            "- Client data is never shared with third parties\n"
            "- All data is processed securely\n"
            "- Access to internal systems is restricted\n"
            "- AI systems are configured to use only approved data sources\n\n"
            "We comply with general data protection principles and best practices."
        ),
        "keywords": [
            "data", "privacy", "security", "secure", "protection", "gdpr", "confidential",
            "safe", "third", "party", "access", "restricted", "compliance", "information",
            "private",
        ],
    },
    {
        "id": "account-access",
        "title": "Account & Access Credentials",
        "category": Category.SECURITY,
        "content": (
            "Clients receive secure access credentials for any systems developed by "
            "{company_name}.\n\n"
            "It is the client's responsibility to keep login credentials confidential. "
            "{company_name} is not responsible for issues caused by unauthorized access "
            "due to credential sharing."
        ),
        "keywords": [
            "account", "access", "credentials", "login", "password", "secure",
            "responsibility", "unauthorized", "sharing", "confidential", "username",
        ],
    },
    {
        "id": "faq-redesign",
        "title": "FAQ: Website Redesign",
        "category": Category.FAQ,
        "content": (
            "Q: Do you offer website redesign services?\n\n"
            "Yes, we redesign existing websites to improve performance, usability, and "
            "modern design standards."
        ),
        "keywords": [
            "redesign", "website", "existing", "improve", "update", "refresh",
            "modernize", "revamp", "old", "current", "remake", "offer",
        ],
    },
    {
        "id": "faq-api-integration",
        "title": "FAQ: Third-Party API Integration",
        "category": Category.FAQ,
        "content": (
            "Q: Can you integrate third-party APIs?\n\n"
            "Yes, we regularly integrate payment gateways, CRM systems, and external APIs."
        ),
        "keywords": [
            "api", "integration", "integrate", "third-party", "payment", "gateway", "crm",
            "external", "connect", "stripe", "paypal", "system",
        ],
    },
    {
        "id": "faq-mobile-app",
        "title": "FAQ: Mobile App Development",
        "category": Category.FAQ,
        "content": (
            "Q: Do you provide mobile app development?\n\n"
            "Our primary focus is web applications. Mobile apps may be developed using "
            "web-based technologies depending on requirements."
        ),
        "keywords": [
            "mobile", "app", "application", "ios", "android", "phone", "smartphone",
            "pwa", "responsive", "native",
        ],
    },
    {
        "id": "faq-existing-maintenance",
        "title": "FAQ: Existing Project Maintenance",
        "category": Category.FAQ,
        "content": (
            "Q: Can you maintain an existing project?\n\n"
            "Yes, we offer maintenance services for both projects developed by us and "
            "third-party systems."
        ),
        "keywords": [
            "maintain", "maintenance", "existing", "project", "third-party", "legacy",
            "old", "current", "take", "over", "takeover",
        ],
    },
    {
        "id": "contracts-legal",
        "title": "Contracts & Legal Agreements",
        "category": Category.LEGAL,
        "content": (
            "All projects are governed by a service agreement that defines scope, "
            "timelines, pricing, and responsibilities.\n\n"
            "Changes outside the original scope may require a revised agreement or "
            "additional charges."
        ),
        "keywords": [
            "contract", "legal", "agreement", "scope", "timeline", "terms", "conditions",
            "responsibilities", "changes", "revision", "document", "sign", "nda",
        ],
    },
    {
        "id": "refunds-cancellations",
        "title": "Refunds & Cancellations Policy",
        "category": Category.LEGAL,
        "content": (
            "Refunds depend on the project stage:\n"
            "- Work already completed is non-refundable\n"
            "- Remaining unused hours or phases may be refundable\n"
            "- Cancellations must be submitted in writing\n\n"
            "Each case is reviewed individually."
        ),
        "keywords": [
            "refund", "refunds", "cancel", "cancellation", "money", "back", "return",
            "policy", "completed", "unused", "writing", "stop",
        ],
    },
    {
        "id": "contact-info",
        "title": "Contact Information",
        "category": Category.CONTACT,
        "content": (
            "Clients can contact {company_name} via:\n"
            "- Email support\n"
            "- Contact forms on the website\n"
            "- Scheduled video calls\n\n"
            "Response time is typically within 24 business hours."
        ),
        "keywords": [
            "contact", "email", "phone", "call", "reach", "message", "form", "video",
            "meeting", "response", "time", "how", "get", "touch", "talk", "speak",
        ],
    },
    {
        "id": "language-support",
        "title": "Multi-Language Support",
        "category": Category.SUPPORT,
        "content": (
            "{company_name} supports clients in:\n"
            "- English\n"
            "- French\n\n"
            "Documentation and communication can be provided in either language."
        ),
        "keywords": [
            "language", "english", "french", "multilingual", "translation",
            "communication", "documentation", "speak", "parler", "français", "languages",
        ],
    },
)


def build_knowledge_base(company_name: str = "Our Company") -> List[KnowledgeChunk]:
    """Render the bundled corpus for the given company name."""
    chunks = [
        KnowledgeChunk.model_validate(
            {**entry, "content": str(entry["content"]).format(company_name=company_name)}
        )
        for entry in _SAMPLE_CORPUS
    ]
    ensure_unique_ids(chunks)
    return chunks


@lru_cache(maxsize=1)
def _default_knowledge_base() -> Tuple[KnowledgeChunk, ...]:
    settings = get_settings()
    if settings.corpus_path is not None:
        _log.info("Loading knowledge base from %s", settings.corpus_path)
        return tuple(load_chunks(settings.corpus_path))
    return tuple(build_knowledge_base(settings.company_name))


def get_knowledge_base() -> Sequence[KnowledgeChunk]:
    """Return the process-wide corpus, built once on first use."""
    return _default_knowledge_base()


def get_categories(chunks: Iterable[KnowledgeChunk] | None = None) -> List[Category]:
    """Return the distinct categories present in the corpus, in corpus order."""
    if chunks is None:
        chunks = get_knowledge_base()
    return list(dict.fromkeys(chunk.category for chunk in chunks))


def get_chunks_by_category(
    category: Category,
    chunks: Iterable[KnowledgeChunk] | None = None,
) -> List[KnowledgeChunk]:
    """Return all chunks of one category."""
    if chunks is None:
        chunks = get_knowledge_base()
    return [chunk for chunk in chunks if chunk.category == category]


def get_company_name() -> str:
    """Return the configured company name."""
    return get_settings().company_name


__all__ = [
    "build_knowledge_base",
    "get_knowledge_base",
    "get_categories",
    "get_chunks_by_category",
    "get_company_name",
]
