from extraction.sections import LOCAL_EXPERT_SECTIONS

LOCAL_EXPERT_PROMPT = """
You are a knowledgeable local expert for {destination}. Provide detailed local insights and recommendations for a visitor staying from {start_date} to {end_date}.
Their preferences: {preferences}

Please provide recommendations for:
{sections}

Format your response in clear sections, numbered exactly as above, with practical, actionable advice.
"""

ITINERARY_PROMPT = """
You are an expert travel itinerary planner. Create a detailed day-by-day itinerary for the following trip:
Destination: {destination}
Start Date: {start_date}
End Date: {end_date}
Preferences: {preferences}
Local recommendations to draw on: {local_recommendations}

Consider the following:
1. Time of year and weather
2. Popular attractions and hidden gems
3. Logical flow of activities
4. Travel time between locations
5. Meal times and restaurant suggestions
6. Rest periods
7. Local events or seasonal activities

Start each day with "Day N:" and list activities one per line as "HH:MM AM - Activity - details".
Provide specific times, locations, and activity durations.
"""

BUDGET_PROMPT = """
You are an expert travel budget planner. Create a detailed budget breakdown for the following trip:
Destination: {destination}
Start Date: {start_date}
End Date: {end_date}
Preferences: {preferences}
Planned activities: {planned_activities}

Please provide a detailed budget breakdown with specific USD amounts for each category:

1. Accommodation: $XXX (total for the trip)
2. Activities: $XXX (museums, tours, attractions)
3. Transportation: $XXX (local transport, taxis, etc.)
4. Food: $XXX (meals, snacks, drinks)
5. Miscellaneous: $XXX (souvenirs, tips, emergency fund)

Total Budget: $XXX USD

For each category, provide specific dollar amounts, a brief explanation of what's included and money-saving tips where applicable.
Use this exact format with dollar signs and amounts clearly marked.
"""

WEATHER_PROMPT = """
You are a weather expert providing travel advice based on weather conditions.

Location: {location}
Travel Dates: {start_date} to {end_date}
Weather Data: {weather_data}

Based on the weather forecast, provide:
1. A brief summary of the weather conditions during the trip
2. Clothing recommendations
3. Activity suggestions based on weather
4. Any weather-related travel tips or warnings

Format your response as practical advice for travelers.
"""

FLIGHT_PROMPT = """
You are a flight booking assistant. These flight options were found from {origin} ({origin_code}) to {destination} ({destination_code}).
Departure date: {departure_date}. Return date: {return_date}.

Flight options:
{flight_options}

Start with a two-sentence overview of the options, then give recommendations on pricing, duration, and booking tips.
"""

ACCOMMODATION_PROMPT = """
You are an expert travel accommodation advisor. Based on the following accommodation search results and travel request, provide helpful recommendations and insights.

Travel Request:
- Destination: {destination}
- Dates: {start_date} to {end_date}
- Accommodation Type: {accommodation_type}
- Budget: {budget}
- Travel Style: {travel_style}

Accommodation Options Found:
{accommodation_options}

Please provide:
1. A brief summary of the accommodation search results (2-3 sentences)
2. 3-5 specific recommendations for choosing accommodations, considering value for money, location advantages, amenities that match the travel style, booking tips and timing, and local neighborhood insights

Format your response as:
SUMMARY: [Your summary here]

RECOMMENDATIONS:
• [Recommendation 1]
• [Recommendation 2]
• [Recommendation 3]
"""


def local_expert_sections() -> str:
    """Numbered category list; its order drives extraction.sections.parse_recommendations."""
    return "\n".join(f"{idx}. {heading}" for idx, (_field, heading) in enumerate(LOCAL_EXPERT_SECTIONS, start=1))
