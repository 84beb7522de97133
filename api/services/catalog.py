"""Built-in example content served by the canned intent generators."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CodeSnippet:
    id: str
    title: str
    content: str
    language: str
    tags: List[str] = field(default_factory=list)
    last_used: str = ""
    project: str = ""


@dataclass(frozen=True)
class StoredMemory:
    id: str
    title: str
    content: str
    type: str
    date: str
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Campaign:
    id: str
    title: str
    strategy: str
    platforms: List[str] = field(default_factory=list)
    budget: str = ""
    duration: str = ""
    kpis: List[str] = field(default_factory=list)


SNIPPETS: List[CodeSnippet] = [
    CodeSnippet(
        id="floating-card-1",
        title="Floating Black Card Component",
        content="""<div className="fixed bottom-4 right-4 bg-black rounded-lg shadow-xl p-4 text-white max-w-sm animate-fade-in">
  <div className="flex items-center gap-3">
    <div className="w-8 h-8 bg-blue-500 rounded-full" />
    <div>
      <h3 className="font-medium">Notification</h3>
      <p className="text-sm opacity-75">{message}</p>
    </div>
  </div>
</div>""",
        language="react",
        tags=["ui", "floating", "notification", "card"],
        last_used="2 days ago",
        project="dashboard-redesign",
    ),
    CodeSnippet(
        id="social-post-scheduler",
        title="Social Media Post Scheduler",
        content="""const schedulePost = async (content, platforms, scheduledTime) => {
  const post = {
    content,
    platforms: platforms.split(','),
    scheduledTime: new Date(scheduledTime),
    status: 'scheduled',
    analytics: { impressions: 0, engagement: 0 }
  };

  return await socialMediaAPI.schedule(post);
};""",
        language="javascript",
        tags=["social-media", "scheduler", "automation"],
        last_used="1 hour ago",
        project="vortex-campaign-manager",
    ),
    CodeSnippet(
        id="trend-analyzer",
        title="Trending Topics Analyzer",
        content="""const analyzeTrends = async (platform, timeframe = '24h') => {
  const trends = await trendingAPI.getTrends({
    platform,
    timeframe,
    location: 'global'
  });

  return trends.map(trend => ({
    hashtag: trend.name,
    volume: trend.tweet_volume,
    growth: trend.growth_rate,
    relevanceScore: calculateRelevance(trend)
  }));
};""",
        language="javascript",
        tags=["trends", "social-media", "analytics"],
        last_used="30 minutes ago",
        project="trend-intelligence",
    ),
]

MEMORIES: List[StoredMemory] = [
    StoredMemory(
        id="campaign-strategy-1",
        title="Viral TikTok Campaign Strategy",
        content=(
            "Key elements: Hook in first 3 seconds, trending audio, user-generated content encouragement, "
            "cross-platform promotion. Target: Gen Z, 16-24 age group."
        ),
        type="strategy",
        date="today",
        tags=["tiktok", "viral", "strategy", "gen-z"],
    ),
    StoredMemory(
        id="content-calendar-1",
        title="Q4 Content Calendar Framework",
        content=(
            "Weekly themes: Monday motivation, Tuesday tips, Wednesday wins, Thursday throwback, Friday fun. "
            "Holiday content: Halloween, Black Friday, Cyber Monday, Christmas campaigns."
        ),
        type="planning",
        date="yesterday",
        tags=["content-calendar", "q4", "holidays", "framework"],
    ),
    StoredMemory(
        id="oauth-implementation-1",
        title="OAuth Integration Best Practices",
        content=(
            "Use PKCE for public clients, implement proper state validation, secure token storage, "
            "refresh token rotation. Never expose client secrets in frontend."
        ),
        type="reference",
        date="3 days ago",
        tags=["oauth", "security", "authentication", "best-practices"],
    ),
]

CAMPAIGNS: List[Campaign] = [
    Campaign(
        id="eco-product-launch",
        title="Eco-Friendly Product Launch Campaign",
        strategy=(
            "Sustainability-focused messaging, influencer partnerships, user-generated content, "
            "educational content series"
        ),
        platforms=["tiktok", "instagram", "twitter", "linkedin"],
        budget="$10000",
        duration="2 weeks",
        kpis=["brand_awareness", "engagement_rate", "conversions"],
    ),
]

HELP_TOPICS = {
    "social media": "Social Media: Platform-specific strategies, content calendars, hashtag research, viral mechanics",
    "campaign": "Campaign Management: Strategy development, multi-platform coordination, performance tracking",
    "content": "Content Creation: Research, planning, SEO optimization, visual design, distribution",
    "trends": "Trend Analysis: Real-time monitoring, hashtag research, competitive intelligence",
    "oauth": "OAuth Implementation: PKCE flow, secure token storage, refresh handling, best practices",
    "react": "React Patterns: Component design, state management, performance optimization, testing",
}

CAMPAIGN_TYPES = {
    "viral": "Viral Campaign Strategy",
    "product launch": "Product Launch Campaign",
    "brand awareness": "Brand Awareness Campaign",
    "engagement": "Engagement-Focused Campaign",
}
